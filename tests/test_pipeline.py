"""
Tests for the preprocessing pipeline: step selection, ordering, hand-off
between steps, and failure reporting.
"""

import numpy as np
import pytest

from errors import ImageDecodeError, ImageEncodeError
from preprocessing import (
    PREPROCESS_STEPS,
    REMOVE_BACKGROUND_COLOR,
    REMOVE_TABLE_GRID_LINES,
    ImageBlob,
    PreprocessOptions,
    PreprocessStep,
    Surface,
    decode_image,
    enabled_steps,
    run_preprocess_pipeline,
)
from preprocessing import image_io

ALL_OFF = PreprocessOptions(has_background_color=False, has_table_grid_lines=False)
BOTH_ON = PreprocessOptions(has_background_color=True, has_table_grid_lines=True)


class TestStepRegistry:
    """Tests for the registered step table."""

    def test_background_runs_before_gridlines(self):
        assert [step.id for step in PREPROCESS_STEPS] == [
            REMOVE_BACKGROUND_COLOR,
            REMOVE_TABLE_GRID_LINES,
        ]

    def test_default_options_enable_gridlines_only(self):
        assert [step.id for step in enabled_steps(PreprocessOptions())] == [REMOVE_TABLE_GRID_LINES]

    def test_no_steps_when_all_off(self):
        assert enabled_steps(ALL_OFF) == []


class TestRunPreprocessPipeline:
    """Behavior of run_preprocess_pipeline with the registered steps."""

    def test_all_off_returns_source_object(self, table_png):
        result = run_preprocess_pipeline(table_png, ALL_OFF)
        assert result.image is table_png
        assert result.applied_steps == []

    def test_all_off_never_decodes(self):
        junk = ImageBlob(data=b"definitely not an image", mime_type="image/png")
        result = run_preprocess_pipeline(junk, ALL_OFF)
        assert result.image is junk

    def test_gridlines_only(self, table_png):
        result = run_preprocess_pipeline(
            table_png, PreprocessOptions(has_background_color=False, has_table_grid_lines=True)
        )

        assert result.applied_steps == [REMOVE_TABLE_GRID_LINES]
        assert result.image.mime_type == "image/png"
        assert result.image.data != table_png.data

        pixels = decode_image(result.image).pixels
        assert np.all(pixels[50, :] == 255)
        assert np.all(pixels[70:75, 70:75, :3] == 0)

    def test_default_options_remove_gridlines(self, table_png):
        result = run_preprocess_pipeline(table_png)
        assert result.applied_steps == [REMOVE_TABLE_GRID_LINES]

    def test_background_only(self, table_png):
        result = run_preprocess_pipeline(
            table_png, PreprocessOptions(has_background_color=True, has_table_grid_lines=False)
        )
        assert result.applied_steps == [REMOVE_BACKGROUND_COLOR]

    def test_both_steps_in_registration_order(self, table_png):
        result = run_preprocess_pipeline(table_png, BOTH_ON)
        assert result.applied_steps == [REMOVE_BACKGROUND_COLOR, REMOVE_TABLE_GRID_LINES]

    def test_rerun_on_output_is_stable(self, table_png):
        first = run_preprocess_pipeline(table_png, BOTH_ON)
        second = run_preprocess_pipeline(first.image, BOTH_ON)

        assert second.applied_steps == first.applied_steps
        assert np.array_equal(decode_image(second.image).pixels, decode_image(first.image).pixels)

    @pytest.mark.parametrize("options", [ALL_OFF, BOTH_ON, PreprocessOptions(), PreprocessOptions(True, False)])
    def test_applies_exactly_the_enabled_steps(self, table_png, options):
        result = run_preprocess_pipeline(table_png, options)
        assert result.applied_steps == [step.id for step in enabled_steps(options)]

    def test_source_decoded_once(self, table_png, monkeypatch):
        calls = []
        real_decode = image_io.decode_image

        def counting_decode(blob):
            calls.append(blob)
            return real_decode(blob)

        monkeypatch.setattr(image_io, "decode_image", counting_decode)
        run_preprocess_pipeline(table_png, BOTH_ON)
        assert calls == [table_png]

    def test_undecodable_source_raises(self):
        junk = ImageBlob(data=b"not an image", mime_type="image/png")
        with pytest.raises(ImageDecodeError):
            run_preprocess_pipeline(junk, BOTH_ON)

    def test_empty_encoder_output_raises(self, table_png, monkeypatch):
        class _SilentImage:
            def save(self, fp, format=None):
                pass

        monkeypatch.setattr(image_io.Image, "fromarray", lambda pixels: _SilentImage())
        with pytest.raises(ImageEncodeError):
            run_preprocess_pipeline(table_png, BOTH_ON)

    def test_surface_input_rejected(self, table_pixels):
        with pytest.raises(TypeError, match="Expected ImageBlob"):
            run_preprocess_pipeline(Surface(pixels=table_pixels), BOTH_ON)

    def test_artifacts_saved_per_step(self, table_png, tmp_path):
        result = run_preprocess_pipeline(table_png, BOTH_ON, artifact_dir=tmp_path)

        assert list(result.artifact_paths) == [REMOVE_BACKGROUND_COLOR, REMOVE_TABLE_GRID_LINES]
        assert result.artifact_paths[REMOVE_BACKGROUND_COLOR].endswith("01_remove-background-color.png")
        assert result.artifact_paths[REMOVE_TABLE_GRID_LINES].endswith("02_remove-table-grid-lines.png")
        assert (tmp_path / "02_remove-table-grid-lines.png").exists()

    def test_no_artifacts_by_default(self, table_png):
        assert run_preprocess_pipeline(table_png).artifact_paths == {}


class TestCustomSteps:
    """Hand-off semantics with stub steps."""

    def test_each_step_receives_previous_output(self, table_png):
        received = []
        first_output = Surface(pixels=np.zeros((2, 2, 4), dtype=np.uint8))

        def first(image):
            received.append(image)
            return first_output

        def second(image):
            received.append(image)
            return Surface(pixels=np.full((2, 2, 4), 255, dtype=np.uint8))

        steps = (
            PreprocessStep(id="first", is_enabled=lambda options: True, apply=first),
            PreprocessStep(id="second", is_enabled=lambda options: True, apply=second),
        )
        result = run_preprocess_pipeline(table_png, ALL_OFF, steps=steps)

        assert received[0] is table_png
        assert received[1] is first_output
        assert result.applied_steps == ["first", "second"]
        assert np.all(decode_image(result.image).pixels == 255)

    def test_disabled_step_not_called(self, table_png):
        def explode(image):
            raise AssertionError("disabled step was called")

        steps = (
            PreprocessStep(id="off", is_enabled=lambda options: False, apply=explode),
            PreprocessStep(id="on", is_enabled=lambda options: True, apply=image_io.to_surface),
        )
        result = run_preprocess_pipeline(table_png, ALL_OFF, steps=steps)
        assert result.applied_steps == ["on"]

    def test_options_passed_to_predicates(self, table_png):
        seen = []

        def predicate(options):
            seen.append(options)
            return False

        steps = (PreprocessStep(id="probe", is_enabled=predicate, apply=image_io.to_surface),)
        run_preprocess_pipeline(table_png, BOTH_ON, steps=steps)
        assert seen == [BOTH_ON]
