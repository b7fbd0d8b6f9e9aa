# tests/model_tests/test_deletion_channel.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Test suite for the simulated deletion channel

"""Test suite for DeletionChannel: seeded determinism, the extreme deletion
probabilities and the subsequence property of every trace."""

from itertools import islice

import pytest

from model.bits import is_subsequence
from model.channel import DeletionChannel


class TestDeletionChannel:
    """Random message and trace generation."""

    def test_same_seed_same_stream(self):
        first = DeletionChannel(0.5, seed=42)
        second = DeletionChannel(0.5, seed=42)

        message = first.new_message(8)
        assert message == second.new_message(8)
        assert list(islice(first.traces(message), 20)) == list(islice(second.traces(message), 20))

    def test_message_length(self):
        channel = DeletionChannel(0.3, seed=1)

        assert len(channel.new_message(12)) == 12
        assert channel.new_message(0) == ()

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError):
            DeletionChannel(0.3).new_message(-1)

    def test_traces_are_subsequences(self):
        channel = DeletionChannel(0.5, seed=7)
        message = channel.new_message(10)

        for trace in islice(channel.traces(message), 200):
            assert len(trace) <= len(message)
            assert is_subsequence(trace, message)

    def test_zero_probability_keeps_every_bit(self):
        channel = DeletionChannel(0.0, seed=3)
        message = channel.new_message(16)

        assert channel.new_trace(message) == message

    def test_unit_probability_deletes_every_bit(self):
        channel = DeletionChannel(1.0, seed=3)
        message = channel.new_message(16)

        assert channel.new_trace(message) == ()

    @pytest.mark.parametrize("probability", [-0.01, 1.01])
    def test_invalid_probability_rejected(self, probability):
        with pytest.raises(ValueError):
            DeletionChannel(probability)
