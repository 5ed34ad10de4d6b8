"""End-to-end tests for the command line interface."""

import pytest
import yaml

from interview_ingest.app import build_parser, main
from interview_ingest.config import CONFIG_ENV_VAR, CONFIG_FILENAME, IngestConfig, load_config
from interview_ingest.readers import read_table


START_ONLY_CSV = "speaker,content,start\nA,hello world,0\nA,foo,\nB,bar,10\n"


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    """Run every CLI test in an empty directory without a config override."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run_report(capsys, argv):
    assert main(argv) == 0
    return yaml.safe_load(capsys.readouterr().out)


class TestParser:
    def test_commands(self):
        parser = build_parser()
        args = parser.parse_args(["transcript", "t.csv", "-c", "x.yaml"])
        assert args.action == "transcript"
        assert args.config == "x.yaml"

    def test_codes_has_no_config_flag(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["codes", "c.csv", "--config", "x.yaml"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestTemplate:
    def test_writes_loadable_config(self, isolated_cwd, capsys):
        assert main(["template"]) == 0
        path = isolated_cwd / CONFIG_FILENAME
        assert "Wrote template config" in capsys.readouterr().out

        config = load_config(path)
        assert config.timing == IngestConfig().timing
        assert config.column_overrides == {}

    def test_refuses_overwrite(self, isolated_cwd, capsys):
        (isolated_cwd / CONFIG_FILENAME).write_text("keep", encoding="utf-8")
        assert main(["template"]) == 2
        assert "Refusing to overwrite" in capsys.readouterr().err
        assert (isolated_cwd / CONFIG_FILENAME).read_text(encoding="utf-8") == "keep"

        assert main(["template", "--force"]) == 0
        assert "timing:" in (isolated_cwd / CONFIG_FILENAME).read_text(encoding="utf-8")


class TestTranscriptCommand:
    def test_start_only_table(self, write_file, capsys):
        path = write_file("t.csv", START_ONLY_CSV)
        report = run_report(capsys, ["transcript", str(path)])

        assert report["detected_format"] == "timestamped"
        assert report["timing_mode"] == "startOnly"
        assert report["has_timestamps"] is True
        assert report["speakers"] == ["A", "B"]
        assert report["duration"] == 11
        assert [(t["start"], t["end"]) for t in report["turns"]] == [
            ("00:00:00", "00:00:01"),
            ("00:00:01", "00:00:10"),
            ("00:00:10", "00:00:11"),
        ]
        assert [c["expected"] for c in report["columns"]] == ["speaker", "content", "start", "end"]
        assert report["stats"]["largest_num_of_turns_by_a_speaker"] == 2

    def test_text_transcript(self, write_file, capsys):
        path = write_file("t.txt", "Alice: Hello there\nBob: Hi\n\nAlice: Bye now\n")
        report = run_report(capsys, ["transcript", str(path)])

        assert report["detected_format"] == "colon"
        assert report["timing_mode"] == "untimed"
        assert report["duration"] is None
        assert report["total_line_count"] == 5
        assert [t["speaker"] for t in report["turns"]] == ["ALICE", "BOB", "ALICE"]
        assert "columns" not in report
        assert "start" not in report["turns"][0]

    def test_config_speech_rate(self, write_file, capsys):
        path = write_file("t.csv", START_ONLY_CSV)
        config = write_file("my.yaml", "timing:\n  speech_rate_words_per_second: 0.5\n")
        report = run_report(capsys, ["transcript", str(path), "--config", str(config)])
        assert report["duration"] == 12

    def test_config_from_env(self, write_file, capsys, monkeypatch):
        path = write_file("t.csv", START_ONLY_CSV)
        config = write_file("env.yaml", "timing:\n  speech_rate_words_per_second: 0.5\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        report = run_report(capsys, ["transcript", str(path)])
        assert report["duration"] == 12

    def test_unmapped_column_lists_headers(self, write_file, capsys):
        path = write_file("t.csv", "Speaker,Text\nA,hello\n")
        assert main(["transcript", str(path)]) == 2
        err = capsys.readouterr().err
        assert "content" in err
        assert "Available headers: speaker, text" in err

    def test_column_override(self, write_file, capsys):
        path = write_file("t.csv", "Speaker,Text\nA,hello\n")
        write_file(CONFIG_FILENAME, "columns:\n  content: Text\n")
        report = run_report(capsys, ["transcript", str(path)])
        assert report["turns"] == [{"turn": 1, "speaker": "A", "content": "hello"}]

    def test_no_usable_rows(self, write_file, capsys):
        path = write_file("t.csv", "speaker,content\nA,\n,hello\n")
        assert main(["transcript", str(path)]) == 2
        assert "No usable transcript data" in capsys.readouterr().err

    def test_missing_file(self, capsys):
        assert main(["transcript", "missing.csv"]) == 2
        assert "not found" in capsys.readouterr().err

    def test_missing_explicit_config(self, write_file, capsys):
        path = write_file("t.csv", START_ONLY_CSV)
        assert main(["transcript", str(path), "-c", "nope.yaml"]) == 2
        assert "Config file not found" in capsys.readouterr().err

    def test_output_file(self, write_file, isolated_cwd, capsys):
        path = write_file("t.csv", START_ONLY_CSV)
        out = isolated_cwd / "out" / "report.yaml"
        assert main(["transcript", str(path), "-o", str(out)]) == 0
        assert "Wrote report" in capsys.readouterr().out
        assert yaml.safe_load(out.read_text(encoding="utf-8"))["timing_mode"] == "startOnly"


class TestCodesCommand:
    def test_turn_based(self, write_file, capsys):
        path = write_file("codes.csv", "Code,Turn\nquestion,1\nanswer,2\nquestion,3\nquestion,x\n")
        report = run_report(capsys, ["codes", str(path)])

        assert report["format"] == "Turn-based"
        assert report["kind"] == "turn"
        assert report["codes"] == ["question", "answer"]
        assert report["skipped_rows"] == 1
        assert report["entries"] == [
            {"code": "question", "turns": [1, 3]},
            {"code": "answer", "turns": [2]},
        ]

    def test_time_based_without_code_column(self, write_file, capsys):
        path = write_file("Cross_Talk.tsv", "start\tend\n0:05\t0:10\n1:00\t1:30\n")
        report = run_report(capsys, ["codes", str(path)])

        assert report["format"] == "Time-based"
        assert report["codes"] == ["cross talk"]
        assert report["entries"][1] == {
            "code": "cross talk",
            "start": "00:01:00",
            "end": "00:01:30",
            "start_seconds": 60,
            "end_seconds": 90,
        }

    def test_not_a_code_file(self, write_file, capsys):
        path = write_file("t.csv", "speaker,content\nA,hello\n")
        assert main(["codes", str(path)]) == 2
        assert "Not a usable code file" in capsys.readouterr().err


class TestTranscriptInputs:
    def test_subtitle_file(self, write_file, capsys):
        path = write_file(
            "talk.srt",
            "1\n00:00:01,000 --> 00:00:04,000\nHello world\n\n2\n00:00:05,000 --> 00:00:06,000\nBye\n",
        )
        report = run_report(capsys, ["transcript", str(path)])

        assert report["detected_format"] == "timestamped"
        assert report["timing_mode"] == "startEnd"
        assert report["speakers"] == ["SPEAKER 1"]
        assert report["duration"] == 6
        assert report["turns"][0] == {
            "turn": 1,
            "speaker": "SPEAKER 1",
            "start": "00:00:01",
            "end": "00:00:04",
            "content": "Hello world",
        }

    def test_empty_subtitle_file(self, write_file, capsys):
        path = write_file("empty.vtt", "WEBVTT\n\n")
        assert main(["transcript", str(path)]) == 2
        assert "No usable transcript data" in capsys.readouterr().err

    def test_auto_text_format(self, write_file, capsys):
        path = write_file(
            "t.txt",
            "[00:00:05] Alice: hi there\n[00:00:10] Bob: hello\nmore from bob\n",
        )
        report = run_report(capsys, ["transcript", str(path), "--text-format", "auto"])

        assert report["detected_format"] == "timestamped"
        assert report["timing_mode"] == "startOnly"
        assert report["continuation_line_count"] == 1
        assert report["total_line_count"] == 3
        assert report["turns"] == [
            {"turn": 1, "speaker": "ALICE", "start": "00:00:05", "content": "hi there"},
            {"turn": 2, "speaker": "BOB", "start": "00:00:10", "content": "hello more from bob"},
        ]
        assert report["duration"] == pytest.approx(10 + 4 / 3)

    def test_forced_text_format(self, write_file, capsys):
        path = write_file("t.txt", "Alice\thi\nBob: yo\n")
        report = run_report(capsys, ["transcript", str(path), "--text-format", "tab-separated"])
        assert report["detected_format"] == "tab-separated"
        assert [t["content"] for t in report["turns"]] == ["hi Bob: yo"]

    def test_unknown_text_format_is_a_usage_error(self, write_file):
        path = write_file("t.txt", "A: b\n")
        with pytest.raises(SystemExit):
            main(["transcript", str(path), "--text-format", "tabular"])

    def test_merge_turns(self, write_file, capsys):
        path = write_file("t.txt", "A: one\nA: two\nB: three\n")
        report = run_report(capsys, ["transcript", str(path), "--merge-turns"])
        assert [(t["speaker"], t["content"]) for t in report["turns"]] == [("A", "one two"), ("B", "three")]
        assert report["stats"]["largest_turn_length"] == 2

    def test_csv_export(self, write_file, isolated_cwd, capsys):
        path = write_file("t.csv", START_ONLY_CSV)
        report_path = isolated_cwd / "report.yaml"
        csv_path = isolated_cwd / "export" / "t.csv"

        assert main(["transcript", str(path), "-o", str(report_path), "--csv", str(csv_path)]) == 0
        assert "Wrote transcript CSV" in capsys.readouterr().out

        rows = read_table(csv_path).rows
        assert [(r["speaker"], r["content"], r["start"], r["end"]) for r in rows] == [
            ("A", "hello world", "00:00:00", "00:00:01"),
            ("A", "foo", "00:00:01", "00:00:10"),
            ("B", "bar", "00:00:10", "00:00:11"),
        ]
