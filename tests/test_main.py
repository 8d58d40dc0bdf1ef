import palletstack.main as app
from palletstack.core.stack_planner import plan_stack
from palletstack.models.material import MaterialItem
from palletstack.visualization import layout_plot


def _plan():
    return plan_stack(MaterialItem(400, 300, 200, name="A-100"), 1350)


def test_report_failure_is_shown_as_error(monkeypatch):
    errors = []

    def fail(fig, path):
        raise RuntimeError("kaleido unavailable")

    monkeypatch.setattr(layout_plot, "save_figure_image", fail)
    monkeypatch.setattr(app.st, "error", errors.append)
    plan = _plan()

    result = app.generate_report(plan, layout_plot.pallet_stack_figure(plan), layout_plot.layer_floor_plans(plan))

    assert result is None
    assert len(errors) == 1
    assert "kaleido unavailable" in errors[0]


def test_report_bytes_are_a_pdf(monkeypatch):
    errors = []
    monkeypatch.setattr(layout_plot, "save_figure_image", lambda fig, path: path)
    monkeypatch.setattr(app.st, "error", errors.append)
    plan = _plan()

    result = app.generate_report(plan, layout_plot.pallet_stack_figure(plan), layout_plot.layer_floor_plans(plan))

    assert result.startswith(b"%PDF")
    assert errors == []
