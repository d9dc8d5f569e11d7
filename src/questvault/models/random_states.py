"""Random generator states persisted with a save.

Each generator is a numpy ``Generator`` over ``PCG64``, serialized as
``"<state>-<increment>-<has uint32>-<uint32>"`` in hex, so a loaded save
continues the exact same random sequence. The last two parts hold the
buffered half of a 64-bit draw left over by 32-bit draws; saves from before
they were stored only have the first two parts.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Self

import numpy as np

from questvault.json_utils.convertible import CorrectionEntry, JsonConvertible
from questvault.json_utils.corrections import remap_keys_if_exist
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary
from questvault.models.enums import TileNoiseType

SEED_UPPER_BOUND = 2**32


def make_random_generator(seed: int | None = None) -> np.random.Generator:
    """Create a PCG64-backed generator, seeded from OS entropy when ``seed`` is None."""
    return np.random.Generator(np.random.PCG64(seed))


def serialize_random(generator: np.random.Generator) -> str:
    """Serialize the full state of a PCG64 generator."""
    bit_state = generator.bit_generator.state
    state = bit_state["state"]
    return (
        f"{state['state']:x}-{state['inc']:x}-"
        f"{int(bit_state['has_uint32']):x}-{int(bit_state['uinteger']):x}"
    )


def deserialize_random(value: Any) -> tuple[bool, np.random.Generator | None]:
    """Rebuild a generator from :func:`serialize_random` output.

    Returns:
        ``(success, generator)``; the generator is None on failure
    """
    if not isinstance(value, str):
        return False, None
    parts = value.split("-")
    if len(parts) == 2:
        parts += ["0", "0"]
    if len(parts) != 4:
        return False, None
    try:
        state, inc, has_uint32, uinteger = (int(part, 16) for part in parts)
        bit_generator = np.random.PCG64()
        bit_generator.state = {
            "bit_generator": "PCG64",
            "state": {"state": state, "inc": inc},
            "has_uint32": has_uint32,
            "uinteger": uinteger,
        }
    except (ValueError, OverflowError):
        return False, None
    return True, np.random.Generator(bit_generator)


def generate_noise_seeds(
    parent_random: np.random.Generator,
    partial_seeds: dict[TileNoiseType, int] | None = None,
) -> dict[TileNoiseType, int]:
    """Fill in a seed for every tile noise type missing from ``partial_seeds``."""
    seeds = dict(partial_seeds or {})
    for noise_type in TileNoiseType:
        if noise_type not in seeds:
            seeds[noise_type] = int(parent_random.integers(0, SEED_UPPER_BOUND))
    return seeds


def _snake_case_keys(tree: JsonDictionary) -> JsonDictionary:
    return remap_keys_if_exist(
        tree,
        {
            "mainRandom": "main_random",
            "worldRandom": "world_random",
            "miscRandom": "misc_random",
            "tileTypeNoiseSeeds": "tile_type_noise_seeds",
            "chunkSeedModifier": "chunk_seed_modifier",
        },
    )


@dataclass
class RandomStates(JsonConvertible):
    """Every random generator a save needs to reproduce its world."""

    main_random: np.random.Generator
    world_random: np.random.Generator
    misc_random: np.random.Generator
    tile_type_noise_seeds: dict[TileNoiseType, int]
    chunk_seed_modifier: float

    version_correcters: ClassVar[list[CorrectionEntry]] = [
        # 2.0.1 -> 2.0.2
        CorrectionEntry(_snake_case_keys, "2.0.2"),
    ]

    @classmethod
    def new(cls, seed: int | None = None) -> Self:
        """Create fresh states, all derived from one main generator."""
        main_random = make_random_generator(seed)
        world_random = make_random_generator(int(main_random.integers(0, SEED_UPPER_BOUND)))
        misc_random = make_random_generator(int(main_random.integers(0, SEED_UPPER_BOUND)))
        return cls(
            main_random=main_random,
            world_random=world_random,
            misc_random=misc_random,
            tile_type_noise_seeds=generate_noise_seeds(world_random),
            chunk_seed_modifier=float(world_random.random()),
        )

    def to_json(self) -> JsonDictionary:
        return {
            "main_random": serialize_random(self.main_random),
            "world_random": serialize_random(self.world_random),
            "misc_random": serialize_random(self.misc_random),
            "tile_type_noise_seeds": {
                noise_type.value: seed for noise_type, seed in self.tile_type_noise_seeds.items()
            },
            "chunk_seed_modifier": self.chunk_seed_modifier,
        }

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        main_random = fields.custom("main_random", deserialize_random) or make_random_generator()
        world_random = fields.custom("world_random", deserialize_random) or make_random_generator(
            int(main_random.integers(0, SEED_UPPER_BOUND))
        )
        misc_random = fields.custom("misc_random", deserialize_random) or make_random_generator(
            int(main_random.integers(0, SEED_UPPER_BOUND))
        )

        partial_seeds = fields.value("tile_type_noise_seeds", dict[TileNoiseType, int], default={})
        seeds = generate_noise_seeds(world_random, partial_seeds)
        if len(partial_seeds) < len(seeds):
            missing = sorted(noise_type.value for noise_type in seeds if noise_type not in partial_seeds)
            fields.fail(
                f"regenerated missing tile noise seeds: {', '.join(missing)}",
                field_name="tile_type_noise_seeds",
            )

        chunk_seed_modifier = fields.value("chunk_seed_modifier", float, default=None)
        if chunk_seed_modifier is None:
            chunk_seed_modifier = float(world_random.random())

        return cls(
            main_random=main_random,
            world_random=world_random,
            misc_random=misc_random,
            tile_type_noise_seeds=seeds,
            chunk_seed_modifier=chunk_seed_modifier,
        )
