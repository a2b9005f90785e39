import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from main import main


class TestMain:
    def test_prints_accounts(self, tmp_path, capsys):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 2, 1, 5.0",
            "deposit, 1, 2, 1.5",
            "dispute, 2, 1,",
            "chargeback, 2, 1,",
            "withdrawal, 1, 3, 9",
        ]))

        exit_code = main([str(csv_file)])

        assert exit_code == 0
        assert capsys.readouterr().out == (
            "client,available,held,total,locked\n"
            "1,1.5000,0.0000,1.5000,false\n"
            "2,0.0000,0.0000,0.0000,true\n"
        )

    def test_missing_file_exits_non_zero(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.csv")])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.out == ""
        assert "missing.csv" in captured.err

    def test_verbose_logs_rejections(self, tmp_path, caplog):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "dispute, 1, 1,",
        ]))

        with caplog.at_level(logging.DEBUG):
            exit_code = main(["--verbose", str(csv_file)])

        assert exit_code == 0
        assert "UnknownTransaction" in caplog.text
        assert "Processed: 0, Failed: 1" in caplog.text
