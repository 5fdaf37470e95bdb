"""Tests for the hybrid console/file logger."""

import logging
import re

from utils import HybridLogger


def read_log(hybrid):
    for handler in hybrid.main_logger.handlers:
        handler.flush()
    return hybrid.log_file.read_text(encoding="utf-8")


def test_class_logger_format(tmp_path):
    hybrid = HybridLogger("fmt_test", log_dir=str(tmp_path), console=False)
    try:
        hybrid.get_class_logger("Controller").info("State transition: A → B")
        text = read_log(hybrid)
        assert "[INFO] [Controller] State transition: A → B" in text
    finally:
        hybrid.cleanup()


def test_level_filtering(tmp_path):
    hybrid = HybridLogger("level_test", log_dir=str(tmp_path), console=False)
    try:
        quiet = hybrid.get_class_logger("Quiet", logging.WARNING)
        quiet.info("hidden")
        quiet.warning("shown")

        child = quiet.create_class_logger("Child", logging.DEBUG)
        child.debug("child debug")

        text = read_log(hybrid)
        assert "hidden" not in text
        assert "[Quiet] shown" in text
        assert "[Child] child debug" in text
    finally:
        hybrid.cleanup()


def test_error_with_exception_details(tmp_path):
    hybrid = HybridLogger("error_test", log_dir=str(tmp_path), console=False)
    try:
        logger = hybrid.get_main_logger()
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            logger.error("Callback failed", exception=e)

        text = read_log(hybrid)
        assert "Callback failed | Type: RuntimeError" in text
        assert "Traceback" in text
    finally:
        hybrid.cleanup()


def test_same_class_logger_reused(tmp_path):
    hybrid = HybridLogger("reuse_test", log_dir=str(tmp_path), console=False)
    try:
        assert hybrid.get_class_logger("A") is hybrid.get_class_logger("A")
    finally:
        hybrid.cleanup()


def test_timestamps_have_milliseconds(tmp_path):
    hybrid = HybridLogger("ms_test", log_dir=str(tmp_path), console=False)
    try:
        hybrid.get_main_logger().info("tick")
        line = read_log(hybrid).splitlines()[0]
        assert re.match(r"^\[\d{2}:\d{2}:\d{2}\.\d{3}\] \[INFO\] \[Main\] tick$", line)
    finally:
        hybrid.cleanup()


def test_old_log_files_pruned(tmp_path):
    for day in (1, 2, 3):
        (tmp_path / f"prune_test_2020-01-0{day}_00-00-00.log").write_text("old")
    (tmp_path / "other_2020-01-01_00-00-00.log").write_text("unrelated")

    hybrid = HybridLogger("prune_test", log_dir=str(tmp_path), console=False, keep_files=2)
    try:
        remaining = sorted(path.name for path in tmp_path.glob("prune_test_*.log"))
        assert len(remaining) == 2
        assert remaining[0] == "prune_test_2020-01-03_00-00-00.log"
        assert hybrid.log_file.name in remaining
        assert (tmp_path / "other_2020-01-01_00-00-00.log").exists()
    finally:
        hybrid.cleanup()
