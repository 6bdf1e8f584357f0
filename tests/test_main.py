from __future__ import annotations

from pathlib import Path

from blueprint_area import main as main_mod


def test_parse_args_defaults() -> None:
    args = main_mod.parse_args([])
    assert args.image is None
    assert args.config is None
    assert args.log_level == "INFO"


def test_parse_args_with_image_and_config() -> None:
    args = main_mod.parse_args(["plan.pdf", "--config", "cfg.json", "--log-level", "DEBUG"])
    assert args.image == "plan.pdf"
    assert args.config == "cfg.json"
    assert args.log_level == "DEBUG"


def test_unreadable_config_exits_nonzero(tmp_path: Path, monkeypatch) -> None:
    launched = []
    monkeypatch.setattr(main_mod.gui_client, "main", lambda *a, **k: launched.append(a))
    assert main_mod.main(["--config", str(tmp_path / "missing.json")]) == 1
    assert launched == []


def test_launches_gui_with_loaded_config(tmp_path: Path, monkeypatch) -> None:
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text('{"unit": "in"}', encoding="utf-8")
    launched = []
    monkeypatch.setattr(main_mod.gui_client, "main", lambda cfg, image: launched.append((cfg, image)))
    assert main_mod.main(["--config", str(cfg_path), "plan.png"]) == 0
    cfg, image = launched[0]
    assert cfg["unit"] == "in"
    assert image == "plan.png"
