"""
Tests for the CSV telemetry logger.
"""

from difflife.stats import StatsLogger


class TestStatsLogger:
    """Tests for StatsLogger."""

    def test_writes_header_and_rows(self, tmp_path):
        path = tmp_path / "stats.csv"
        logger = StatsLogger(path)
        logger.open()
        logger.log(0, 5, 5.0, 0, "start")
        logger.log(10, 7, 7.0, 12)
        logger.close()

        lines = path.read_text().splitlines()
        assert lines[0] == "gen,time_s,population,sum,redrawn,event"
        assert lines[1].startswith("0,")
        assert lines[1].endswith(",5,5,0,start")
        assert lines[2].endswith(",7,7,12,")

    def test_log_before_open_is_noop(self, tmp_path):
        logger = StatsLogger(tmp_path / "never.csv")
        logger.log(1, 1, 1.0, 1)

        assert not logger.is_open
        assert not (tmp_path / "never.csv").exists()

    def test_unwritable_path_disables_logging(self, tmp_path):
        logger = StatsLogger(tmp_path / "missing" / "stats.csv")
        logger.open()

        assert not logger.is_open
        logger.log(1, 1, 1.0, 1, "extinct")

    def test_context_manager_and_double_close(self, tmp_path):
        path = tmp_path / "ctx.csv"
        with StatsLogger(path) as logger:
            assert logger.is_open
        logger.close()

        assert path.read_text().startswith("gen,")
