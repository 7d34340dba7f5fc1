import asyncio
import builtins
from pathlib import Path

from preview_fit.core.preferences import Preferences, get_pref_int


def test_load_async_reads_file_and_overrides(tmp_path, config_manager):
    config_path = tmp_path / "config.txt"
    config_path.write_text("preview.max_preview_width = 1920\npreview.log_level = info\n", encoding='utf-8')
    override_path = config_manager.resolve_override_path(config_path)
    override_path.parent.mkdir(parents=True, exist_ok=True)
    override_path.write_text("preview.log_level = debug\n", encoding='utf-8')

    prefs = asyncio.run(Preferences.load_async(config_path, config_manager=config_manager))

    assert prefs.scope("preview").snapshot() == {"max_preview_width": "1920", "log_level": "debug"}


def test_scoped_write_async_updates_file_and_cache(tmp_path, config_manager):
    config_path = tmp_path / "config.txt"
    config_path.write_text("preview.max_preview_width = 1920\nother.key = 1\n", encoding='utf-8')
    prefs = Preferences(config_path, config_manager=config_manager)
    scoped = prefs.scope("preview")

    assert asyncio.run(scoped.write_async({"max_preview_width": 1280, "skip_front_facing": False}))

    assert get_pref_int(scoped, "max_preview_width", 0) == 1280
    assert scoped.get("skip_front_facing") == "false"
    assert prefs.reload()["preview.max_preview_width"] == "1280"
    assert prefs.get("other.key") == "1"


def test_write_async_on_read_only_config_lands_in_override(tmp_path, monkeypatch, config_manager):
    config_path = tmp_path / "config.txt"
    config_path.write_text("preview.log_level = info\n", encoding='utf-8')
    original_open = builtins.open

    def fake_open(path, mode='r', *args, **kwargs):
        if Path(path) == config_path and 'w' in mode:
            raise PermissionError("read-only install")
        return original_open(path, mode, *args, **kwargs)

    monkeypatch.setattr('builtins.open', fake_open)
    prefs = Preferences(config_path, config_manager=config_manager)

    assert asyncio.run(prefs.scope("preview").write_async({"log_level": "error"}))

    assert "preview.log_level = info" in config_path.read_text(encoding='utf-8')
    assert prefs.reload()["preview.log_level"] == "error"


def test_failed_write_leaves_cache_untouched(tmp_path, config_manager):
    prefs = Preferences(tmp_path / "missing.txt", config_manager=config_manager)

    assert not asyncio.run(prefs.write_async({"preview.log_level": "debug"}))
    assert prefs.get("preview.log_level") is None
