import pytest

from genebattle.core.errors import UnknownCreatureError
from genebattle.core.genes import GENES
from genebattle.data.creatures import (
    CHARACTER_STATS, CreatureCatalog, CreatureTemplate, base_stats, genes_for_id,
)
from genebattle.battle.effectiveness import MULTIPLIERS
from genebattle.battle.constants import SPLASH_DAMAGE_MULTIPLIER

def test_table_covers_every_creature():
    assert len(CHARACTER_STATS) == 42
    for g in GENES:
        assert g in CHARACTER_STATS
        for h in GENES:
            assert f"{g}-{h}" in CHARACTER_STATS


def test_stat_budget():
    for cid, (hp, attack, speed) in CHARACTER_STATS.items():
        assert hp % 3 == 0, cid
        assert hp // 3 + attack + speed == 200, cid


def test_damage_is_always_an_exact_integer():
    for cid, (_, attack, _) in CHARACTER_STATS.items():
        assert attack % 4 == 0, cid
        for mult in MULTIPLIERS:
            assert float(attack * mult).is_integer()
        genes = genes_for_id(cid)
        if len(genes) == 2 and genes[0] == genes[1]:
            assert attack % 8 == 0, cid
            for mult in MULTIPLIERS:
                assert float(attack * mult * SPLASH_DAMAGE_MULTIPLIER).is_integer()


def test_unknown_creature_raises():
    with pytest.raises(UnknownCreatureError):
        base_stats("Pink")
    with pytest.raises(UnknownCreatureError):
        CreatureCatalog.default().get("Red-Pink")


def test_template_stats_and_description():
    t = CreatureTemplate("Red", ("Red",))
    assert (t.stats.hp, t.stats.attack, t.stats.speed) == (120, 120, 40)
    assert t.rarity == "common"
    assert t.description() == "Attacks: Red Attack, Neutral Attack (no type bonus)"
    assert CreatureTemplate("Blue-Blue", ("Blue", "Blue")).rarity == "uncommon"
    assert CreatureTemplate("Blue-Red", ("Blue", "Red")).rarity == "rare"


def test_default_catalog_unlocks_single_genes():
    catalog = CreatureCatalog.default()
    assert len(catalog) == 42
    assert sorted(t.id for t in catalog.unlocked()) == sorted(GENES)
    assert catalog.progress() == (6, 42)
    assert catalog.unlock("Red-Blue") is True
    assert catalog.unlock("Red-Blue") is False
    assert catalog.progress() == (7, 42)
    assert "Red-Blue" in catalog
