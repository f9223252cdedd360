"""Packing sprites and audio into an assets directory and generating asset ID code."""

from __future__ import annotations

import argparse
import keyword
import shutil
from pathlib import Path
from typing import Optional, Sequence

from pixelgate.asset_id import MAX_IDS
from pixelgate.sprite_atlas import PathLike, form_atlas, rerun_print

_MODULE_TEMPLATE = '''"""Asset identifiers for the packed sprites, music and sounds."""

from enum import IntEnum

from pixelgate.asset_id import AppAssetId


{sprites}

{music}

{sounds}

ASSET_ID = AppAssetId(sprite=SpriteId, music=MusicId, sound=SoundId)
'''


def _check_identifier(name: str, asset_name: str) -> None:
    if not asset_name.isidentifier() or keyword.iskeyword(asset_name) or asset_name.startswith("_"):
        raise ValueError(f"invalid {name} asset name: {asset_name!r}")


def gen_asset_enum(name: str, ids: Sequence[str]) -> str:
    """Source of an ``IntEnum`` class ``name`` whose members are ``ids`` numbered from zero."""
    if len(ids) > MAX_IDS:
        raise ValueError(f"too many {name} assets")
    for asset_name in ids:
        _check_identifier(name, asset_name)
    if not ids:
        return f"class {name}(IntEnum):\n    pass\n"
    members = "".join(f"    {asset_name} = {index}\n" for index, asset_name in enumerate(ids))
    return f"class {name}(IntEnum):\n{members}"


def _copy_file(source: Path, target: Path, check_rerun: bool) -> None:
    rerun_print(check_rerun, source)
    rerun_print(check_rerun, target)
    try:
        shutil.copyfile(source, target)
    except FileNotFoundError as err:
        raise FileNotFoundError(f"Missing file: {source}") from err


def enumerate_audio(
    in_dir: PathLike,
    out_dir: PathLike,
    prefix: str,
    mp3_fallback: bool,
    check_rerun: bool,
) -> list[str]:
    """Copy each ``.ogg`` in ``in_dir`` to ``<prefix><id>.ogg`` in ``out_dir``; return names by ID."""
    out_dir = Path(out_dir)
    paths = sorted(path for path in Path(in_dir).iterdir() if path.suffix == ".ogg")
    for asset_id, path in enumerate(paths):
        out_path = out_dir / f"{prefix}{asset_id}.ogg"
        _copy_file(path, out_path, check_rerun)
        if mp3_fallback:
            _copy_file(path.with_suffix(".mp3"), out_path.with_suffix(".mp3"), check_rerun)
    return [path.stem for path in paths]


class AssetPacker:
    """Packs sprite atlases and audio files into an assets directory and generates ID enums."""

    def __init__(self, assets_dir: PathLike):
        self.assets_dir = Path(assets_dir)
        self.assets_dir.mkdir(parents=True, exist_ok=True)
        self.check_rerun = False
        self.mp3_fallback = False
        self._sprites: Optional[list[str]] = None
        self._music: Optional[list[str]] = None
        self._sounds: Optional[list[str]] = None

    def rerun_if_changed(self) -> None:
        """Print rerun-if-changed lines for every file read or written from now on."""
        if self._sprites is not None or self._music is not None or self._sounds is not None:
            raise RuntimeError("cannot add rerun checks after asset packing has already started")
        self.check_rerun = True

    def enable_mp3_fallback(self) -> None:
        """Copy ``.mp3`` files alongside the ``.ogg`` audio files."""
        if self._music is not None or self._sounds is not None:
            raise RuntimeError("cannot set mp3 fallback after audio asset packing has already started")
        self.mp3_fallback = True

    def sprites(self, in_dir: PathLike) -> list[str]:
        """Pack the ``.png`` images of ``in_dir`` into the sprite atlas; return names by ID."""
        if self._sprites is not None:
            raise RuntimeError("sprites(...) was already invoked")
        self._sprites = form_atlas(in_dir, self.assets_dir / "sprites", 1, self.check_rerun)
        return list(self._sprites)

    def music(self, in_dir: PathLike) -> list[str]:
        """Copy the ``.ogg`` music of ``in_dir`` into the assets directory; return names by ID."""
        if self._music is not None:
            raise RuntimeError("music(...) was already invoked")
        self._music = enumerate_audio(in_dir, self.assets_dir, "music", self.mp3_fallback, self.check_rerun)
        return list(self._music)

    def sounds(self, in_dir: PathLike) -> list[str]:
        """Copy the ``.ogg`` sounds of ``in_dir`` into the assets directory; return names by ID."""
        if self._sounds is not None:
            raise RuntimeError("sounds(...) was already invoked")
        self._sounds = enumerate_audio(in_dir, self.assets_dir, "sound", self.mp3_fallback, self.check_rerun)
        return list(self._sounds)

    def gen_asset_id_code(self, out: PathLike) -> str:
        """Write a module defining ``SpriteId``, ``MusicId``, ``SoundId`` and ``ASSET_ID`` to ``out``."""
        if self._sprites is None:
            raise RuntimeError("sprites(...) was not invoked")
        code = _MODULE_TEMPLATE.format(
            sprites=gen_asset_enum("SpriteId", self._sprites),
            music=gen_asset_enum("MusicId", self._music or []),
            sounds=gen_asset_enum("SoundId", self._sounds or []),
        )
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(code, encoding="utf-8")
        return code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Pack sprites, music and sounds and write the asset ID module."""
    parser = argparse.ArgumentParser(description="Pack game assets and generate asset IDs.")
    parser.add_argument("--assets-dir", default="assets")
    parser.add_argument("--sprites", default="src_assets/sprites")
    parser.add_argument("--music", default="src_assets/music")
    parser.add_argument("--sounds", default="src_assets/sounds")
    parser.add_argument("--out", default="asset_id.py")
    parser.add_argument("--rerun-if-changed", action="store_true")
    parser.add_argument("--mp3-fallback", action="store_true")
    args = parser.parse_args(argv)

    packer = AssetPacker(args.assets_dir)
    if args.rerun_if_changed:
        packer.rerun_if_changed()
    if args.mp3_fallback:
        packer.enable_mp3_fallback()
    packer.sprites(args.sprites)
    packer.music(args.music)
    packer.sounds(args.sounds)
    packer.gen_asset_id_code(args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())