from genebattle.core.genes import GENES, NEUTRAL, wheel_distance
from genebattle.battle.effectiveness import (
    MULTIPLIERS, effectiveness, effectiveness_against, exact_damage, single_damage, splash_damage,
)

def test_wheel_neighbours():
    assert effectiveness("Red", "Orange") == 1.5
    assert effectiveness("Red", "Yellow") == 1.25
    assert effectiveness("Red", "Purple") == 0.5
    assert effectiveness("Red", "Blue") == 0.75
    assert effectiveness("Red", "Green") == 1.0
    assert effectiveness("Red", "Red") == 1.0
    assert effectiveness("Purple", "Red") == 1.5


def test_chart_follows_wheel_distance():
    expected = {0: 1.0, 1: 1.5, 2: 1.25, 3: 1.0, 4: 0.75, 5: 0.5}
    for attack in GENES:
        for defend in GENES:
            assert effectiveness(attack, defend) == expected[wheel_distance(attack, defend)]


def test_neutral_is_always_plain():
    for defend in GENES:
        assert effectiveness(NEUTRAL, defend) == 1.0


def test_only_first_gene_defends():
    # Orange as the second gene would be super effective; Green in front is neutral.
    assert effectiveness_against("Red", ("Green", "Orange")) == 1.0
    assert effectiveness_against("Red", ("Orange", "Green")) == 1.5


def test_every_multiplier_is_known():
    for attack in GENES + (NEUTRAL,):
        for defend in GENES:
            assert effectiveness(attack, defend) in MULTIPLIERS


def test_damage_values():
    assert single_damage(120, "Red", ("Orange",)) == 180
    assert single_damage(120, "Red", ("Purple",)) == 60
    assert single_damage(40, NEUTRAL, ("Red",)) == 40
    assert splash_damage(120, "Red", ("Yellow",)) == 75
    assert splash_damage(104, "Red", ("Blue",)) == 39
    assert exact_damage(72, 0.75) == 54
