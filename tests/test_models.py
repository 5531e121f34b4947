import pytest
from pydantic import ValidationError

from htmap.models import (
    BrushParameters,
    ColorRamp,
    ColorStop,
    ConfigurationError,
    HeatmapError,
    PipelineConfig,
    ProcessingError,
    ProcessingStage,
    RenderParameters,
    hex_to_rgb,
)


def test_hex_to_rgb():
    assert hex_to_rgb("#ef4444") == (239, 68, 68)
    assert hex_to_rgb("3B82F6") == (59, 130, 246)


@pytest.mark.parametrize("text", ["#fff", "red", "#12345g", ""])
def test_hex_to_rgb_rejects_malformed(text):
    with pytest.raises(ConfigurationError):
        hex_to_rgb(text)


def test_color_stop_normalizes():
    stop = ColorStop(offset=1.7, color="ABCDEF", alpha=-0.4)
    assert stop.color == "#abcdef"
    assert stop.offset == 1.0
    assert stop.alpha == 0.0
    assert stop.rgb == (171, 205, 239)


def test_color_stop_rejects_bad_color():
    with pytest.raises(ValidationError):
        ColorStop(color="blue")


def test_default_ramp():
    ramp = ColorRamp.default()
    assert [s.color for s in ramp.stops] == ["#ef4444", "#fbbf24", "#10b981", "#3b82f6"]
    assert [s.offset for s in ramp.stops] == [1.0, 0.66, 0.33, 0.0]
    assert all(s.alpha == 0.8 for s in ramp.stops)


def test_layers_run_base_to_peak():
    layers = ColorRamp.default().layers()
    assert layers[0] == ((59, 130, 246), 0.8)
    assert layers[-1] == ((239, 68, 68), 0.8)


def test_from_entries_spaces_offsets():
    ramp = ColorRamp.from_entries(
        [("#ff0000", 1.0), ("#ffff00", 0.5), ("#00ff00", 0.5), ("#0000ff", 0.25)]
    )
    assert [s.offset for s in ramp.stops] == pytest.approx([1.0, 2 / 3, 1 / 3, 0.0])
    assert ramp.stops[3].alpha == 0.25


def test_from_entries_requires_four():
    with pytest.raises(ConfigurationError):
        ColorRamp.from_entries([("#ff0000", 1.0)] * 3)


def test_from_entries_reports_bad_color_as_configuration_error():
    with pytest.raises(ConfigurationError):
        ColorRamp.from_entries([("#ff0000", 1.0), ("#ffff00", 1.0), ("teal", 1.0), ("#0000ff", 1.0)])


def test_layers_check_count_on_mutated_ramp():
    ramp = ColorRamp.default()
    ramp.stops.append(ColorStop(color="#000000"))
    with pytest.raises(ConfigurationError):
        ramp.layers()


def test_brush_parameters_clamp_energy():
    params = BrushParameters(radius=12, strength=3, alpha_cap=-1)
    assert params.radius == 12
    assert params.strength == 1.0
    assert params.alpha_cap == 0.0
    assert BrushParameters().strength == 0.15


@pytest.mark.parametrize("radius", [0, -3, float("nan"), float("inf")])
def test_brush_parameters_reject_bad_radius(radius):
    with pytest.raises(ValidationError):
        BrushParameters(radius=radius)


def test_render_parameters_clamp():
    params = RenderParameters(global_opacity=2, blur=-0.5)
    assert params.global_opacity == 1.0
    assert params.blur == 0.0
    assert RenderParameters().blur == 0.3


def test_pipeline_config_defaults_and_sensitivity_clamp():
    cfg = PipelineConfig(sensitivity=7)
    assert cfg.sensitivity == 1.0
    assert cfg.background == (247, 247, 247)
    assert not cfg.auto_fill
    assert len(cfg.ramp.stops) == 4


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ConfigurationError, HeatmapError)


def test_processing_error_record():
    err = ProcessingError(
        stage=ProcessingStage.LOAD,
        error_type="file_not_found",
        recoverable=False,
        message="missing",
    )
    assert err.stage == "load"
    assert err.details == {}
    assert [s.value for s in ProcessingStage] == ["load", "extract", "fill", "render", "save"]
