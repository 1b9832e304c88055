from catalog.config import EnvReader, _resolve_custom_id_max_width


def test_env_reader_parses_typed_values():
    reader = EnvReader({"NAME": "  catalog ", "COUNT": "12", "FLAG": "Yes", "EMPTY": "   "})

    assert reader.str("NAME") == "catalog"
    assert reader.str("EMPTY", "fallback") == "fallback"
    assert reader.int("COUNT") == 12
    assert reader.bool("FLAG") is True
    assert reader.warnings == []


def test_env_reader_warns_on_bad_values():
    reader = EnvReader({"COUNT": "twelve", "FLAG": "maybe"})

    assert reader.int("COUNT", 3) == 3
    assert reader.bool("FLAG", True) is True
    assert len(reader.warnings) == 2


def test_custom_id_max_width_defaults_and_bounds():
    assert _resolve_custom_id_max_width(EnvReader({})) == 64
    assert _resolve_custom_id_max_width(EnvReader({"CUSTOM_ID_MAX_WIDTH": "16"})) == 16

    reader = EnvReader({"CUSTOM_ID_MAX_WIDTH": "0"})
    assert _resolve_custom_id_max_width(reader) == 64
    assert reader.warnings


def test_app_config_exposes_custom_id_max_width(app):
    assert app.config["CUSTOM_ID_MAX_WIDTH"] >= 1
    assert app.config["TESTING"] is True
