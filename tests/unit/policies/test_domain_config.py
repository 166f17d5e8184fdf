"""
Unit tests for the domain and orientation policies.
"""

import json

import pytest

from ecm_policies import DomainConfig, GenerationReport, OrientationPolicy, coerce_float


class TestDomainConfig:
    """Tests for DomainConfig."""

    def test_values_coerced_to_float(self):
        config = DomainConfig(x_min="-400", x_max=400, dx="20", y_min=-400, y_max=400, dy=20)
        assert config.x_min == -400.0
        assert isinstance(config.dx, float)
        assert config.z0 == 0.0

    def test_from_dict_round_trip(self):
        d = {"x_min": -10, "x_max": 10, "dx": 1, "y_min": -5, "y_max": 5, "dy": 0.5, "z0": 2}
        config = DomainConfig.from_dict(d)
        assert config.to_dict() == {k: float(v) for k, v in d.items()}

    def test_from_dict_ignores_unknown_keys(self):
        config = DomainConfig.from_dict(
            {"x_min": 0, "x_max": 1, "dx": 1, "y_min": 0, "y_max": 1, "dy": 1, "comment": "x"}
        )
        assert config.dy == 1.0

    def test_from_dict_missing_keys(self):
        with pytest.raises(ValueError, match="dy"):
            DomainConfig.from_dict({"x_min": 0, "x_max": 1, "dx": 1, "y_min": 0, "y_max": 1})

    @pytest.mark.parametrize("field,value", [("dx", 0), ("dy", -1)])
    def test_non_positive_spacing(self, field, value):
        kwargs = dict(x_min=0, x_max=10, dx=1, y_min=0, y_max=10, dy=1)
        kwargs[field] = value
        with pytest.raises(ValueError, match=f"{field}.*positive"):
            DomainConfig(**kwargs)

    def test_empty_extent(self):
        with pytest.raises(ValueError, match="x_max"):
            DomainConfig(x_min=10, x_max=10, dx=1, y_min=0, y_max=10, dy=1)

    def test_non_numeric(self):
        with pytest.raises(ValueError, match="y_min must be a number"):
            DomainConfig(x_min=0, x_max=10, dx=1, y_min="bottom", y_max=10, dy=1)


class TestOrientationPolicy:
    """Tests for OrientationPolicy."""

    def test_defaults(self):
        policy = OrientationPolicy()
        assert policy.parallel_method == "rotate_perpendicular"
        assert policy.solver_method == "L-BFGS-B"
        assert policy.seed is None

    def test_unknown_parallel_method(self):
        with pytest.raises(ValueError, match="parallel_method"):
            OrientationPolicy(parallel_method="guess")

    def test_non_positive_iterations(self):
        with pytest.raises(ValueError, match="max_iterations"):
            OrientationPolicy(max_iterations=0)

    def test_dict_round_trip(self):
        policy = OrientationPolicy(parallel_method="solve_polynomial", seed=7)
        assert OrientationPolicy.from_dict(policy.to_dict()) == policy


class TestGenerationReport:
    """Tests for GenerationReport."""

    def test_record_layer_and_json(self):
        report = GenerationReport()
        report.record_layer(1, 400, 0)
        report.record_layer(2, 30, 30)
        report.add_warning("check me")
        data = json.loads(report.to_json())
        assert data["operation"] == "generate_ic_ecm"
        assert data["metrics"]["layers"][1] == {"layer_id": 2, "n_defined": 30, "n_overwritten": 30}
        assert data["warnings"] == ["check me"]

    def test_coerce_float(self):
        assert coerce_float("1e2", "dx") == 100.0
        with pytest.raises(ValueError, match="dx"):
            coerce_float(None, "dx")
