"""
Tests for the generation logger.
"""

import json

import pytest

from responsive_picture.errors import ArtifactWriteError
from responsive_picture.models import GenerationOptions
from responsive_picture.pipeline.generation import VariantGenerator
from responsive_picture.utils.generation_logger import GenerationLogger, LogLevel, get_logger

from conftest import FakeEngine


def test_singleton():
    assert get_logger() is get_logger()


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "debug")
    GenerationLogger.reset()
    assert get_logger().level == LogLevel.DEBUG


def test_unknown_level_disables(monkeypatch):
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "chatty")
    GenerationLogger.reset()
    assert get_logger().level == LogLevel.NONE


def test_none_level_is_silent(tmp_path, capsys):
    logger = get_logger()
    assert logger.log_run_start("a.png", tmp_path, ["1"], ["png"]) == ""
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "logs").exists()


def test_run_writes_jsonl(monkeypatch, sample_image, tmp_path, capsys):
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "DEBUG")
    GenerationLogger.reset()
    output_dir = tmp_path / "out"
    options = GenerationOptions(
        image_path=sample_image, alt="A", output_dir=output_dir, formats=["png"], sizes=["10", "20"]
    )

    VariantGenerator(engine=FakeEngine()).run(options)

    lines = (output_dir / "logs" / "generation.jsonl").read_text(encoding="utf-8").splitlines()
    events = [json.loads(line)["event"] for line in lines]
    assert events == ["run_start", "variant", "variant", "placeholder", "run_finished"]
    assert len({json.loads(line)["run_id"] for line in lines}) == 1

    out = capsys.readouterr().out
    assert "Run finished" in out


def test_failed_variant_logged_at_info(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_TO_FILE", "false")
    GenerationLogger.reset()
    logger = get_logger()

    logger.log_variant("run", tmp_path, tmp_path / "a-1.png", "png", 1, 1.0)
    logger.log_variant("run", tmp_path, tmp_path / "a-1.x", "x", 1, 1.0, error=ValueError("bad"))

    out = capsys.readouterr().out
    assert "Variant failed" in out and "ValueError: bad" in out
    assert "✅ Variant" not in out
    assert not (tmp_path / "logs").exists()


def test_unwritable_log_dir(monkeypatch, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_DIR", str(blocker))
    GenerationLogger.reset()

    with pytest.raises(ArtifactWriteError) as exc_info:
        get_logger().log_run_start("a.png", tmp_path, ["1"], ["png"])

    assert exc_info.value.path == blocker / "logs" / "generation.jsonl"
