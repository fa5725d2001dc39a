# test_logger.py - app log file helpers

from hitzkale.utils.logger_utils import Log


def test_log_levels_written(tmp_path):
    path = tmp_path / "sub" / "app.log"
    log = Log(str(path))
    log.info("first")
    log.error("second")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "INFO" in lines[0] and lines[0].endswith("| first")
    assert "ERROR" in lines[1] and lines[1].endswith("| second")


def test_echo_goes_to_stderr(tmp_path, capsys):
    log = Log(str(tmp_path / "app.log"), echo=True)
    log.warning("look [here]")
    err = capsys.readouterr().err
    assert "look [here]" in err


def test_default_path_used(tmp_path):
    # conftest points the default path into tmp_path
    Log().debug("hello")
    assert "hello" in (tmp_path / "logs" / "test.log").read_text(encoding="utf-8")


def test_time_block_records_metric(tmp_path):
    path = tmp_path / "timing.log"
    with Log.time_block("load dictionary", path=str(path)) as timer:
        sum(range(1000))
    assert timer.elapsed >= 0.0
    text = path.read_text(encoding="utf-8")
    assert "load dictionary done:" in text
    assert text.strip().endswith("s")


def test_write_and_metric(tmp_path):
    path = str(tmp_path / "x.log")
    Log.write("plain line", path=path)
    Log.metric("results", 4, path=path)
    lines = open(path, encoding="utf-8").read().splitlines()
    assert lines[0].endswith("plain line")
    assert lines[1].endswith("results: 4")
