"""
Unit tests for villa project feasibility.
"""

import pytest

from tvmrealty.valuation import default_scenario, project_feasibility


class TestProjectFeasibility:

    def test_strong_project(self):
        # 2 villas x 2000 sqft x 2800 / 1e5 = 112 L construction
        result = project_feasibility(
            land_cost=100, construction_rate=2800, sale_price_per_villa=150, num_villas=2
        )
        assert result.construction_cost == 112.0
        assert result.total_project_cost == 212.0
        assert result.total_revenue == 300.0
        assert result.net_profit == 88.0
        assert result.roi_pct == pytest.approx(41.5)
        assert result.verdict == "Strong"

    def test_marginal_project(self):
        result = project_feasibility(100, 2800, 115, num_villas=2)
        assert 0 < result.roi_pct <= 20
        assert result.verdict == "Marginal"

    def test_loss_making_project(self):
        result = project_feasibility(100, 2800, 50, num_villas=2)
        assert result.net_profit < 0
        assert result.verdict == "Loss-making"

    def test_break_even_is_loss_making(self):
        result = project_feasibility(44, 2800, 100, num_villas=1)
        assert result.roi_pct == 0.0
        assert result.verdict == "Loss-making"

    def test_zero_cost(self):
        result = project_feasibility(0, 0, 10, num_villas=1)
        assert result.roi_pct == 0.0

    def test_custom_villa_size(self):
        result = project_feasibility(0, 3000, 0, num_villas=1, villa_size_sqft=1000)
        assert result.construction_cost == 30.0


class TestDefaultScenario:

    def test_villas_per_minimum_plot(self):
        # Suburb minimum 3 cents -> 10 cents holds 3 villas
        result = default_scenario(land_value=60, plot_area_cents=10, tier="Suburb", construction_rate=2800)
        assert result.num_villas == 3

    def test_at_least_one_villa(self):
        result = default_scenario(land_value=20, plot_area_cents=2, tier="Premium", construction_rate=3500)
        assert result.num_villas == 1

    def test_sale_price_markup(self):
        # 1.5 x (100 / 1 + 2000 x 3500 / 1e5)
        result = default_scenario(land_value=100, plot_area_cents=5, tier="Premium", construction_rate=3500)
        assert result.sale_price_per_villa == pytest.approx(255.0)
        assert result.roi_pct == pytest.approx(50.0)
        assert result.verdict == "Strong"
