"""Namespaced enumerations shared by the persisted models."""

from enum import StrEnum

from questvault.constants import VANILLA_NAMESPACE

NAMESPACE_SEPARATOR = ":"


def make_namespaced_string(name: str, namespace: str = VANILLA_NAMESPACE) -> str:
    """Prefix a name with a namespace, e.g. ``wood`` -> ``pa:wood``."""
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}"


def get_specific_namespaced_string(value: str, namespace: str = VANILLA_NAMESPACE) -> str:
    """Namespace a name unless it already carries a namespace."""
    if NAMESPACE_SEPARATOR in value:
        return value
    return make_namespaced_string(value, namespace)


class Material(StrEnum):
    """Materials an item can be made of."""

    WOOD = make_namespaced_string("wood")
    STONE = make_namespaced_string("stone")
    COPPER = make_namespaced_string("copper")
    IRON = make_namespaced_string("iron")
    STEEL = make_namespaced_string("steel")
    GOLD = make_namespaced_string("gold")
    SILVER = make_namespaced_string("silver")
    GLASS = make_namespaced_string("glass")
    CLOTH = make_namespaced_string("cloth")
    LEATHER = make_namespaced_string("leather")
    WOOL = make_namespaced_string("wool")
    HEALING_LIQUID = make_namespaced_string("healing_liquid")
    FLINT = make_namespaced_string("flint")


class EntityType(StrEnum):
    """Kinds of entities stored in saves."""

    PLAYER = make_namespaced_string("player")
    CAVEMAN = make_namespaced_string("caveman")
    GHOUL = make_namespaced_string("ghoul")
    TROLL = make_namespaced_string("troll")
    DRAGON = make_namespaced_string("dragon")
    DEMON = make_namespaced_string("demon")
    DWARF = make_namespaced_string("dwarf")
    ELF = make_namespaced_string("elf")
    HUMAN = make_namespaced_string("human")


class TileNoiseType(StrEnum):
    """Noise layers used to generate world tiles, each with its own seed."""

    HEIGHT = "height"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    HOSTILITY = "hostility"
    POPULATION = "population"
