# tests/core_tests/test_strategy_config.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Test suite for strategy selection, configuration and verdicts

"""Test suite for strategy selection, session configuration, verdicts and
the exception hierarchy."""

import pytest

from core.clause import Conjunction, Term
from core.config import ReconstructionConfig, STRATEGY_NAMES
from core.disjunction import TraceDisjunction
from core.exceptions import CandidatesExhausted, ConfigError, ReconstructionError
from core.strategy import create_strategy
from core.supersequence import SupersequenceCounter
from core.verdict import Estimate, Verdict
from core.weighted import WeightedTraceDisjunction


class TestCreateStrategy:
    """Factory for the interchangeable engines."""

    @pytest.mark.parametrize(
        "name, engine",
        [
            ("exact", TraceDisjunction),
            ("weighted", WeightedTraceDisjunction),
            ("supersequence", SupersequenceCounter),
        ],
    )
    def test_builds_named_engine(self, name, engine):
        strategy = create_strategy(name, 6, 0.8)

        assert isinstance(strategy, engine)
        assert strategy.message_len == 6
        assert strategy.traces_folded == 0

    def test_every_configured_name_is_buildable(self):
        for name in STRATEGY_NAMES:
            create_strategy(name, 3)

    def test_unknown_name_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            create_strategy("bogus", 4)

        assert exc_info.value.context == {"strategy": "bogus"}

    def test_prior_seeds_exact_engine(self, b):
        prior = TraceDisjunction(3, [Conjunction((Term(0),))])
        strategy = create_strategy("exact", 3, prior=prior)
        strategy.fold(b("01"))

        assert not strategy.satisfied_by(b("001"))
        assert strategy.satisfied_by(b("101"))
        assert strategy.traces_folded == 1

    def test_prior_seeds_weighted_engine(self):
        prior = TraceDisjunction(3, [Conjunction((Term(0),)), Conjunction((Term(1, True),))])
        strategy = create_strategy("weighted", 3, prior=prior)

        assert strategy.weights == {Conjunction((Term(0),)): 1, Conjunction((Term(1, True),)): 1}

    def test_unsatisfiable_prior_is_exhausted(self):
        strategy = create_strategy("exact", 3, prior=TraceDisjunction(3, []))

        assert strategy.estimate().verdict is Verdict.EXHAUSTED

    def test_prior_length_must_match(self):
        with pytest.raises(ConfigError):
            create_strategy("exact", 4, prior=TraceDisjunction(3))

    def test_supersequence_rejects_prior(self):
        with pytest.raises(ConfigError):
            create_strategy("supersequence", 3, prior=TraceDisjunction(3))


class TestReconstructionConfig:
    """Configuration validation."""

    def test_defaults(self):
        config = ReconstructionConfig()

        assert config.message_len == 8
        assert config.deletion_probability == 0.5
        assert config.strategy == "exact"
        assert config.validate() is config

    @pytest.mark.parametrize(
        "field, value",
        [
            ("message_len", -1),
            ("deletion_probability", -0.1),
            ("deletion_probability", 1.0),
            ("strategy", "fuzzy"),
            ("confidence_threshold", 1.0),
            ("confidence_threshold", -0.5),
            ("max_traces", 0),
        ],
    )
    def test_invalid_field_rejected(self, field, value):
        config = ReconstructionConfig(**{field: value})

        with pytest.raises(ConfigError) as exc_info:
            config.validate()

        assert field in exc_info.value.context

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            ReconstructionConfig(max_traces=-3).validate()


class TestVerdictAndEstimate:
    """Session state values."""

    @pytest.mark.parametrize(
        "verdict, conclusive",
        [
            (Verdict.UNDETERMINED, False),
            (Verdict.RECONSTRUCTED, True),
            (Verdict.EXHAUSTED, True),
        ],
    )
    def test_conclusiveness(self, verdict, conclusive):
        assert verdict.is_conclusive() is conclusive
        assert Estimate(verdict).is_conclusive() is conclusive

    def test_verdict_renders_as_name(self):
        assert str(Verdict.RECONSTRUCTED) == "RECONSTRUCTED"

    def test_estimate_defaults(self):
        estimate = Estimate(Verdict.UNDETERMINED)

        assert estimate.message is None
        assert estimate.confidence == 0.0
        assert estimate.traces_folded == 0


class TestExceptions:
    """Exception hierarchy."""

    def test_candidates_exhausted_carries_count(self):
        error = CandidatesExhausted("gone", traces_folded=4, context={"strategy": "exact"})

        assert isinstance(error, ReconstructionError)
        assert error.traces_folded == 4
        assert error.context == {"strategy": "exact"}
        assert str(error) == "gone"

    def test_context_defaults_to_empty(self):
        assert ReconstructionError("boom").context == {}
