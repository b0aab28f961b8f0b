"""
Debug logger for variant generation runs.

Supports configurable log levels (NONE, INFO, DEBUG, TRACE) and dual output:
- Console: Human-readable formatted output
- File: JSON Lines format for parsing and analysis
"""

import json
import os
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv

from responsive_picture.errors import ArtifactWriteError


class LogLevel(Enum):
    """Logging levels for generation output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


class GenerationLogger:
    """Centralized logger for generation runs with configurable levels."""

    _instance: Optional["GenerationLogger"] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger with configuration from environment."""
        if self._initialized:
            return

        load_dotenv()

        level_str = os.getenv("RESPONSIVE_PICTURE_LOG_LEVEL", "NONE").upper()
        try:
            self.level = LogLevel[level_str]
        except KeyError:
            self.level = LogLevel.NONE

        self.log_to_file = os.getenv("RESPONSIVE_PICTURE_LOG_TO_FILE", "true").lower() == "true"
        log_dir = os.getenv("RESPONSIVE_PICTURE_LOG_DIR")
        self.log_dir = Path(log_dir) if log_dir else None

        self._initialized = True

    @classmethod
    def reset(cls):
        """Drop the singleton so the next call re-reads the environment."""
        cls._instance = None

    def _should_log(self, min_level: LogLevel) -> bool:
        """Check if we should log at the given level."""
        return self.level.value >= min_level.value

    def _format_timestamp(self) -> str:
        """Get ISO8601 formatted timestamp."""
        return datetime.now().isoformat()

    def _write_to_file(self, output_dir: Optional[Union[str, Path]], log_entry: Dict[str, Any]):
        """Write log entry to JSON Lines file."""
        base_dir = self.log_dir or (Path(output_dir) if output_dir else None)
        if not self.log_to_file or base_dir is None:
            return

        log_file = base_dir / "logs" / "generation.jsonl"
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            raise ArtifactWriteError(log_file, e) from e

    def log_run_start(
        self,
        image_path: Union[str, Path],
        output_dir: Union[str, Path],
        sizes: List[str],
        formats: List[str],
    ) -> str:
        """
        Log the start of a generation run.

        Returns:
            Run ID (UUID string), or "" when logging is disabled.
        """
        if not self._should_log(LogLevel.INFO):
            return ""

        run_id = str(uuid.uuid4())
        timestamp = self._format_timestamp()
        task_count = len(sizes) * len(formats)

        print(f"[{timestamp}] 🔵 Run: {image_path} -> {output_dir} | {task_count} variants")
        if self._should_log(LogLevel.DEBUG):
            print(f"  Sizes: {', '.join(sizes)}")
            print(f"  Formats: {', '.join(formats)}")

        self._write_to_file(output_dir, {
            "timestamp": timestamp,
            "level": self.level.name,
            "event": "run_start",
            "run_id": run_id,
            "image_path": str(image_path),
            "sizes": sizes,
            "formats": formats,
        })
        return run_id

    def log_variant(
        self,
        run_id: str,
        output_dir: Union[str, Path],
        output_path: Union[str, Path],
        fmt: str,
        size: int,
        latency_ms: float,
        error: Optional[BaseException] = None,
    ):
        """Log one finished variant; failures at INFO, successes at DEBUG."""
        min_level = LogLevel.INFO if error is not None else LogLevel.DEBUG
        if not self._should_log(min_level):
            return

        timestamp = self._format_timestamp()
        if error is not None:
            print(f"[{timestamp}] ❌ Variant failed: {output_path} | {type(error).__name__}: {error}")
        else:
            print(f"[{timestamp}] ✅ Variant: {output_path} | {latency_ms:.1f}ms")

        log_entry = {
            "timestamp": timestamp,
            "level": self.level.name,
            "event": "variant",
            "run_id": run_id,
            "output_path": str(output_path),
            "format": fmt,
            "size": size,
            "latency_ms": latency_ms,
            "error": f"{type(error).__name__}: {error}" if error is not None else None,
        }
        self._write_to_file(output_dir, log_entry)

    def log_placeholder(
        self,
        run_id: str,
        output_dir: Union[str, Path],
        image_path: Union[str, Path],
        width: int,
        style: Optional[Dict[str, str]] = None,
    ):
        """Log placeholder generation; TRACE includes the full style map."""
        if not self._should_log(LogLevel.DEBUG):
            return

        timestamp = self._format_timestamp()
        print(f"[{timestamp}] 🖼️  Placeholder: {image_path} at {width}px")

        log_entry: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": self.level.name,
            "event": "placeholder",
            "run_id": run_id,
            "image_path": str(image_path),
            "width": width,
        }
        if self.level == LogLevel.TRACE and style:
            log_entry["style"] = style
        self._write_to_file(output_dir, log_entry)

    def log_run_finished(
        self,
        run_id: str,
        output_dir: Union[str, Path],
        html_path: Optional[Union[str, Path]],
        variant_count: int,
        latency_ms: float,
        html: Optional[str] = None,
    ):
        """Log the end of a run; ``html_path`` is None when the run failed."""
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        if html_path is not None:
            print(f"[{timestamp}] ✅ Run finished: {html_path} | {variant_count} variants | {latency_ms:.1f}ms")
        else:
            print(f"[{timestamp}] ❌ Run failed after {latency_ms:.1f}ms")

        if self._should_log(LogLevel.TRACE) and html:
            print(f"  HTML: {html}")

        self._write_to_file(output_dir, {
            "timestamp": timestamp,
            "level": self.level.name,
            "event": "run_finished",
            "run_id": run_id,
            "html_path": str(html_path) if html_path is not None else None,
            "variant_count": variant_count,
            "latency_ms": latency_ms,
            "html": html if self.level == LogLevel.TRACE else None,
        })


def get_logger() -> GenerationLogger:
    """Get the singleton logger instance."""
    return GenerationLogger()
