"""Tests for the configuration layer."""

import pytest

from neldermead import BoundsStrategy, InvalidInputError, Params, SimplexInit, SolverConfig
from neldermead.utils.validation import validate_solver_config


class TestParams:
    """Simplex coefficients."""

    def test_defaults(self):
        params = Params.default()

        assert params.reflection == 1.0
        assert params.expansion == 2.0
        assert params.contraction == 0.5
        assert params.shrink == 0.5
        assert params.tolerance == 1e-8
        assert params == Params()

    def test_default_returns_fresh_instance(self):
        first = Params.default()
        first.update_param('reflection', 3.0)

        assert Params.default().reflection == 1.0

    def test_validate_accepts_defaults(self):
        Params.default().validate()

    @pytest.mark.parametrize('field', ['reflection', 'expansion', 'contraction', 'shrink'])
    def test_validate_rejects_non_positive_coefficient(self, field):
        params = Params(**{field: 0.0})
        with pytest.raises(InvalidInputError, match=field):
            params.validate()

    def test_validate_rejects_negative_tolerance(self):
        with pytest.raises(InvalidInputError):
            Params(tolerance=-1.0).validate()

    def test_validate_rejects_non_numeric(self):
        with pytest.raises(InvalidInputError):
            Params(reflection='1.0').validate()

    def test_update_unknown_param(self):
        with pytest.raises(InvalidInputError):
            Params().update_param('alpha', 1.0)

    def test_dict_round_trip(self):
        params = Params(reflection=1.5, tolerance=1e-6)

        assert Params.from_dict(params.to_dict()) == params

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(InvalidInputError):
            Params.from_dict({'gamma': 2.0})


class TestSolverConfig:
    """Run-level settings."""

    def test_defaults(self):
        config = SolverConfig()

        assert config.max_iterations == 1000
        assert config.step_size == 1.0
        assert config.max_time is None
        assert config.simplex_init == SimplexInit.AXIS
        assert not config.record_history

    def test_to_dict(self):
        values = SolverConfig(seed=3).to_dict()

        assert values['seed'] == 3
        assert values['simplex_init'] == 'axis'

    def test_update_unknown_param(self):
        with pytest.raises(InvalidInputError):
            SolverConfig().update_param('maxiter', 10)

    @pytest.mark.parametrize('field, value', [
        ('max_iterations', -5),
        ('step_size', 0.0),
        ('max_time', -1.0),
        ('no_improve_break', 0),
        ('seed', -1),
        ('seed', 1.5),
        ('seed', 'abc'),
    ])
    def test_validation(self, field, value):
        config = SolverConfig()
        config.update_param(field, value)
        with pytest.raises(InvalidInputError):
            validate_solver_config(config)


class TestEnums:
    """String-valued option types."""

    def test_bounds_strategy_values(self):
        assert BoundsStrategy('clamp') is BoundsStrategy.CLAMP
        assert BoundsStrategy.PENALTY == 'penalty'

    def test_simplex_init_values(self):
        assert SimplexInit('random') is SimplexInit.RANDOM
