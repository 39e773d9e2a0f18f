"""
Unit tests for the rough cut time-savings model.

Run with: pytest rough_cut_model/test_model.py -v
"""

import pytest
from .model import (
    Baseline, Scenario, ScenarioMetrics, RoughCutModel,
    InvalidInputError, round_half_up, STAGE_NAMES, BASELINE_NAME,
)


@pytest.fixture
def baseline():
    return Baseline(deliverables=12, rough_cut_hours=4, feedback_hours=2, qc_hours=1)


@pytest.fixture
def scenarios():
    return [
        Scenario("Conservative", 2, 1.5, 0.75, total_time_saved_per_project=42),
        Scenario("Average", 1, 1, 0.5, total_time_saved_per_project=63),
        Scenario("Best Case", 0.4, 0.5, 0.25, total_time_saved_per_project=73),
    ]


@pytest.fixture
def model(baseline, scenarios):
    return RoughCutModel(baseline, scenarios)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_ties_round_up(self):
        """Exact halves go up, unlike Python's banker's rounding."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_negative_ties_round_toward_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_regular_rounding(self):
        assert round_half_up(57.14) == 57
        assert round_half_up(59.18) == 59
        assert round_half_up(42.86) == 43


class TestBaseline:
    """Tests for Baseline derived properties."""

    def test_totals(self, baseline):
        assert baseline.other_stage_hours == 3
        assert baseline.total_hours_per_deliverable == 7
        assert baseline.total_hours_per_project == 84

    def test_immutable(self, baseline):
        with pytest.raises(AttributeError):
            baseline.rough_cut_hours = 3


class TestValidation:
    """Tests for calculator input validation."""

    def test_zero_rough_cut_baseline_rejected(self, scenarios):
        base = Baseline(deliverables=12, rough_cut_hours=0, feedback_hours=2, qc_hours=1)
        with pytest.raises(InvalidInputError):
            RoughCutModel(base, scenarios)

    def test_negative_rough_cut_baseline_rejected(self, scenarios):
        base = Baseline(deliverables=12, rough_cut_hours=-1, feedback_hours=2, qc_hours=1)
        with pytest.raises(InvalidInputError):
            RoughCutModel(base, scenarios)

    def test_empty_scenarios_rejected(self, baseline):
        with pytest.raises(InvalidInputError):
            RoughCutModel(baseline, [])

    def test_duplicate_names_rejected(self, baseline):
        dup = [Scenario("A", 1, 1, 1, 10), Scenario("A", 2, 1, 1, 10)]
        with pytest.raises(InvalidInputError, match="Duplicate"):
            RoughCutModel(baseline, dup)

    @pytest.mark.parametrize("name", [BASELINE_NAME, "projects"])
    def test_reserved_names_rejected(self, baseline, name):
        """Names that double as chart row keys would overwrite those keys."""
        with pytest.raises(InvalidInputError, match="Reserved"):
            RoughCutModel(baseline, [Scenario(name, 2, 1, 1, 40)])

    def test_reserved_name_check_is_case_sensitive(self, baseline):
        model = RoughCutModel(baseline, [Scenario("Projects", 2, 1, 1, 40)])
        assert [r['projects'] for r in model.project_projection(3)] == [1, 2, 3]

    def test_invalid_input_is_value_error(self, baseline):
        """Callers catching ValueError also see calculator input errors."""
        with pytest.raises(ValueError):
            RoughCutModel(baseline, [])


class TestScenarioMetrics:
    """Tests for per-scenario summary metrics."""

    def test_hours_saved_per_project(self, model):
        """(baseline rough cut - scenario rough cut) * deliverables."""
        average = model.evaluate_scenario(model.get_scenario("Average"))
        assert average.hours_saved_per_project == 36
        assert average.hours_saved_per_deliverable == 3

    def test_reference_reductions(self, model):
        reductions = [m.rough_cut_reduction_pct for m in model.summarize()]
        assert reductions == [50, 75, 90]

    def test_reference_contributions(self, model):
        contributions = [m.rough_cut_contribution_pct for m in model.summarize()]
        assert contributions == [57, 57, 59]

    def test_best_case_saving(self, model):
        best = model.summarize()[2]
        assert best.hours_saved_per_project == pytest.approx(43.2)
        assert best.hours_per_deliverable == 0.4

    def test_total_time_saved_passed_through(self, model):
        """Supplied totals are reported as given, not re-derived."""
        totals = [m.total_time_saved_per_project for m in model.summarize()]
        assert totals == [42, 63, 73]

    def test_contributions_sum_to_100(self, model):
        for m in model.summarize():
            total = m.rough_cut_contribution_pct + m.other_stage_contribution_pct
            assert abs(total - 100) <= 1

    def test_summary_preserves_order(self, model, scenarios):
        assert [m.name for m in model.summarize()] == [s.name for s in scenarios]

    def test_returns_scenario_metrics(self, model):
        assert all(isinstance(m, ScenarioMetrics) for m in model.summarize())

    def test_idempotent(self, model):
        assert model.summarize() == model.summarize()
        assert model.project_projection(4) == model.project_projection(4)

    def test_hours_saved_across(self, model):
        conservative = model.summarize()[0]
        assert conservative.hours_saved_across(4) == 96


class TestEdgeCases:
    """Tests for boundary scenarios."""

    def test_no_improvement_scenario(self, baseline):
        """Rough cut equal to baseline means 0% reduction and 0 hours saved."""
        model = RoughCutModel(baseline, [Scenario("Same", 4, 2, 1, 10)])
        m = model.summarize()[0]
        assert m.rough_cut_reduction_pct == 0
        assert m.hours_saved_per_project == 0
        assert m.rough_cut_contribution_pct == 0

    def test_slower_scenario_not_clamped(self, baseline):
        """A slower rough cut surfaces a negative reduction and saving."""
        model = RoughCutModel(baseline, [Scenario("Slower", 5, 2, 1, 6)])
        m = model.summarize()[0]
        assert m.rough_cut_reduction_pct == -25
        assert m.hours_saved_per_project == -12
        assert m.rough_cut_contribution_pct == -200

    def test_zero_total_saved_gives_undefined_contribution(self, baseline):
        model = RoughCutModel(baseline, [Scenario("Flat", 3, 2, 1, 0)])
        m = model.summarize()[0]
        assert m.rough_cut_contribution_pct is None
        assert m.other_stage_contribution_pct is None
        assert model.savings_breakdown()[0]['rough_cut_pct'] is None

    def test_unknown_scenario_lookup(self, model):
        with pytest.raises(KeyError):
            model.get_scenario("Nope")


class TestStageComparison:
    """Tests for the stacked stage comparison series."""

    def test_baseline_first(self, model):
        rows = model.stage_comparison()
        assert rows[0] == {'name': BASELINE_NAME, 'rough_cut': 48, 'other_stages': 36}

    def test_scenario_rows_scaled_by_deliverables(self, model):
        rows = {r['name']: r for r in model.stage_comparison()}
        assert rows['Conservative']['rough_cut'] == 24
        assert rows['Conservative']['other_stages'] == 27
        assert rows['Average']['rough_cut'] == 12
        assert rows['Average']['other_stages'] == 18

    def test_row_count(self, model):
        assert len(model.stage_comparison()) == 4


class TestSavingsBreakdown:
    """Tests for the savings breakdown series."""

    def test_parts_sum_to_total(self, model):
        for row in model.savings_breakdown():
            assert row['rough_cut_savings'] + row['other_savings'] == pytest.approx(
                row['total_saved']
            )

    def test_reference_values(self, model):
        conservative = model.savings_breakdown()[0]
        assert conservative == {
            'name': 'Conservative',
            'rough_cut_savings': 24,
            'other_savings': 18,
            'total_saved': 42,
            'rough_cut_pct': 57,
        }


class TestProjectProjection:
    """Tests for the multi-project projection series."""

    def test_linear_scaling(self, model):
        rows = model.project_projection(4)
        one = rows[0]
        for row in rows:
            for name in model.scenario_names:
                assert row[name] == pytest.approx(one[name] * row['projects'])

    def test_conservative_four_projects(self, model):
        rows = model.project_projection(4)
        assert rows[-1]['projects'] == 4
        assert rows[-1]['Conservative'] == 96
        assert rows[-1]['Average'] == 144

    def test_default_length(self, model):
        assert [r['projects'] for r in model.project_projection()] == [1, 2, 3, 4]

    def test_custom_length(self, model):
        assert len(model.project_projection(10)) == 10

    def test_zero_projects_rejected(self, model):
        with pytest.raises(InvalidInputError):
            model.project_projection(0)


class TestTimeDistribution:
    """Tests for per-stage time distribution."""

    def test_baseline_sums_to_project_total(self, model, baseline):
        rows = model.time_distribution()
        assert sum(r['value'] for r in rows) == baseline.deliverables * (4 + 2 + 1)

    def test_stage_order(self, model):
        assert [r['name'] for r in model.time_distribution()] == list(STAGE_NAMES)

    def test_named_scenario(self, model):
        rows = model.time_distribution("Average")
        assert [r['value'] for r in rows] == [12, 12, 6]

    def test_baseline_by_name(self, model):
        assert model.time_distribution(BASELINE_NAME) == model.time_distribution()
