"""Asset identifier enums and the collection type that groups them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Type, TypeVar

MAX_IDS = 65536

E = TypeVar("E", bound=IntEnum)


@dataclass(frozen=True)
class AppAssetId:
    """The sprite, music and sound enums of one app, each numbered from zero."""

    sprite: Type[IntEnum]
    music: Type[IntEnum]
    sound: Type[IntEnum]


def id_count(enum_cls: Type[IntEnum]) -> int:
    """Number of IDs in an asset enum."""
    return len(enum_cls)


def from_id(enum_cls: Type[E], asset_id: int) -> Optional[E]:
    """The asset with the given ID, or None if the ID is out of range."""
    if 0 <= asset_id < id_count(enum_cls):
        return enum_cls(asset_id)
    return None


def _make_enum(name: str, ids: Iterable[str]) -> Type[IntEnum]:
    names = list(ids)
    if len(names) > MAX_IDS:
        raise ValueError(f"too many {name} assets")
    if len(set(names)) != len(names):
        raise ValueError(f"duplicate {name} asset names")
    return IntEnum(name, [(asset_name, index) for index, asset_name in enumerate(names)])


def make_asset_ids(sprites: Iterable[str], music: Iterable[str], sounds: Iterable[str]) -> AppAssetId:
    """Build ``SpriteId``, ``MusicId`` and ``SoundId`` enums from ordered asset names."""
    return AppAssetId(
        sprite=_make_enum("SpriteId", sprites),
        music=_make_enum("MusicId", music),
        sound=_make_enum("SoundId", sounds),
    )