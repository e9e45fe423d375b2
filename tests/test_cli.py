import orjson
import pytest
from typer.testing import CliRunner

from field_formatter.cli import app

runner = CliRunner()

SCHEDULE = "10:00 - 11:00: Meeting\n(5) Chairs\nCatering\n"


@pytest.fixture
def schedule(tmp_path):
    path = tmp_path / "schedule.txt"
    path.write_text(SCHEDULE, encoding="utf-8")
    return path


def test_parse_to_envelope(schedule):
    result = runner.invoke(app, ["parse", str(schedule)])
    assert result.exit_code == 0, result.output
    payload = orjson.loads(result.stdout)
    [section] = payload["sections"]
    assert [i["row_type"] for i in section["items"]] == [
        "time_block",
        "drink_item",
        "category",
    ]


def test_parse_plain_mode_keeps_text(schedule):
    result = runner.invoke(app, ["parse", str(schedule), "--mode", "plain"])
    assert result.exit_code == 0, result.output
    assert result.stdout == SCHEDULE.strip() + "\n"


def test_parse_plain_mode_keeps_stored_envelope(tmp_path):
    path = tmp_path / "stored.json"
    path.write_bytes(
        orjson.dumps(
            {
                "sections": [
                    {
                        "type": "generic",
                        "title": "Crew",
                        "order": 0,
                        "items": [
                            {"row_type": "contact", "content": "Jane Doe", "role": "Chef"}
                        ],
                    }
                ]
            }
        )
    )
    result = runner.invoke(app, ["parse", str(path), "--mode", "plain"])
    assert result.exit_code == 0, result.output
    [section] = orjson.loads(result.stdout)["sections"]
    assert section["items"][0]["role"] == "Chef"


def test_parse_from_stdin():
    result = runner.invoke(app, ["parse", "-", "-m", "plain"], input="(2) Mics\n")
    assert result.exit_code == 0, result.output
    assert result.stdout == "(2) Mics\n"


def test_parse_missing_file(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt")])
    assert result.exit_code != 0


def test_render(tmp_path):
    path = tmp_path / "stored.json"
    path.write_bytes(
        orjson.dumps(
            {
                "sections": [
                    {
                        "type": "generic",
                        "title": "A",
                        "order": 0,
                        "items": [
                            {
                                "row_type": "time_block",
                                "content": "Doors",
                                "start": "18:00",
                                "end": "18:30",
                            }
                        ],
                    },
                    {
                        "type": "generic",
                        "title": "B",
                        "order": 1,
                        "items": [{"row_type": "item", "content": "Chairs", "count": 3}],
                    },
                ]
            }
        )
    )
    result = runner.invoke(app, ["render", str(path)])
    assert result.exit_code == 0, result.output
    assert result.stdout == "18:00 - 18:30: Doors\n\n(3) Chairs\n"


def test_action_increment(schedule):
    result = runner.invoke(app, ["action", str(schedule), "0", "1", "increment"])
    assert result.exit_code == 0, result.output
    items = orjson.loads(result.stdout)["sections"][0]["items"]
    assert items[1]["count"] == 6


def test_action_out_of_range(schedule):
    result = runner.invoke(app, ["action", str(schedule), "3", "0", "remove"])
    assert result.exit_code == 2


def test_check_config(tmp_path):
    path = tmp_path / "formatter.yaml"
    path.write_text(
        "sectionTypes:\n"
        "  crew:\n"
        "    label: Crew\n"
        "    allowedRowTypes: [contact]\n"
        "rowTypes:\n"
        "  contact:\n"
        "    label: Contact\n"
        "    segments:\n"
        "      - kind: text\n"
        "      - kind: badge\n"
        "        field: role\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["check-config", str(path)])
    assert result.exit_code == 0, result.output
    assert "section crew: Crew [contact]" in result.stdout
    assert "row contact: Contact [text, badge]" in result.stdout


def test_check_config_invalid(tmp_path):
    path = tmp_path / "formatter.json"
    path.write_text('{"rowTypes": {}}', encoding="utf-8")
    result = runner.invoke(app, ["check-config", str(path)])
    assert result.exit_code == 1


def test_custom_config_changes_parsing(tmp_path, schedule):
    path = tmp_path / "formatter.json"
    path.write_text(
        '{"sectionTypes": {"notes": {"label": "Notes"}}, "rowTypes": {}}',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["parse", str(schedule), "-c", str(path)])
    assert result.exit_code == 0, result.output
    [section] = orjson.loads(result.stdout)["sections"]
    assert section["title"] == "Notes"
    assert {i["row_type"] for i in section["items"]} == {"text"}
