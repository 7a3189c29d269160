# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for exporting module headers and sources."""

from pathlib import Path

from acpbuilder.compiler.assets import export_module_assets, merged_prefix
from acpbuilder.compiler.settings import CompilationSettings
from acpbuilder.model import Library

# ###############
# Helpers
# ###############


def _module(tmp_path: Path) -> Library:
    directory = tmp_path / "modules" / "acp" / "my_led"
    (directory / "include").mkdir(parents=True)
    (directory / "include" / "Led.h").write_text("// led", encoding="utf-8")
    (directory / "src" / "hw_impl").mkdir(parents=True)
    (directory / "src" / "Led.cpp").write_text("// cpp", encoding="utf-8")
    (directory / "src" / "hw_impl" / "pwm_out.cpp").write_text("// pwm", encoding="utf-8")
    return Library(name="acp.my_led", directory=directory)


def _settings(tmp_path: Path, merge: bool) -> CompilationSettings:
    return CompilationSettings(
        project_file=tmp_path / "project.xml",
        output_root=tmp_path / "out",
        library_name="Demo",
        merge_sources=merge,
    )


# ###############
# Normal Cases
# ###############


def test_mirrored_export(tmp_path: Path) -> None:
    settings = _settings(tmp_path, merge=False)

    export_module_assets(_module(tmp_path), settings)

    assert (settings.include_dir / "acp" / "my_led" / "Led.h").is_file()
    assert (settings.source_dir / "acp" / "my_led" / "Led.cpp").is_file()
    assert (settings.source_dir / "acp" / "my_led" / "hw_impl" / "pwm_out.cpp").is_file()


def test_merged_export_flattens_sources(tmp_path: Path) -> None:
    settings = _settings(tmp_path, merge=True)

    export_module_assets(_module(tmp_path), settings)

    assert (settings.include_dir / "acp" / "my_led" / "Led.h").is_file()
    assert (settings.source_dir / "acp_my__led_Led.cpp").is_file()
    assert (settings.source_dir / "acp_my__led_hw__impl_pwm__out.cpp").read_text(encoding="utf-8") == "// pwm"


def test_merged_prefix() -> None:
    assert merged_prefix("acp.basic_io.led") == "acp_basic__io_led_"


def test_module_without_assets_is_skipped(tmp_path: Path) -> None:
    settings = _settings(tmp_path, merge=False)

    export_module_assets(Library(name="acp.empty", directory=tmp_path), settings)

    assert not settings.library_dir.exists()
