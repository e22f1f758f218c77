from genebattle.battle.models import Combatant, Stats
from genebattle.battle.scheduler import TurnScheduler


def mk(name, team, slot, speed, hp=100, attack=40, genes=("Red",)):
    return Combatant(name=name, template_id=name, genes=genes, team=team, slot=slot,
                     stats=Stats(hp=hp, max_hp=hp, attack=attack, speed=speed))

def keys(combatants):
    return [c.key for c in combatants]


def test_same_inputs_same_order():
    def build():
        return [mk("a", "ally", 0, 40), mk("b", "ally", 1, 120), mk("c", "opponent", 0, 80),
                mk("d", "opponent", 1, 56)]
    s1, s2 = TurnScheduler(), TurnScheduler()
    s1.initialize(build())
    s2.initialize(build())
    assert keys(s1.upcoming) == keys(s2.upcoming)
    assert len(s1.upcoming) >= 20


def test_equal_speed_ties_allies_first_then_slot():
    team = [mk("e", "opponent", 0, 100), mk("a1", "ally", 1, 100), mk("a0", "ally", 0, 100)]
    s = TurnScheduler()
    display = s.initialize(team)
    assert keys(s.upcoming[:6]) == ["a0-P", "a1-P", "e-E"] * 2
    assert len(display) == 6


def test_bar_tie_goes_to_lower_speed():
    slow = mk("slow", "ally", 0, 50)
    fast = mk("fast", "opponent", 0, 200)
    s = TurnScheduler()
    s.initialize([slow, fast])
    # Both bars reach exactly 1000 on tick 20.
    assert keys(s.upcoming[:5]) == ["fast-E", "fast-E", "fast-E", "slow-P", "fast-E"]


def test_overflow_carries_over():
    a = mk("a", "ally", 0, 300)
    b = mk("b", "opponent", 0, 100)
    s = TurnScheduler()
    s.initialize([a, b])
    assert keys(s.upcoming[:4]) == ["a-P", "a-P", "b-E", "a-P"]
    assert s.bar(a) == 1200
    nxt, _ = s.advance()
    assert nxt is a
    assert s.bar(a) == 1100
    assert s.bar(b) == 700


def test_advance_follows_the_buffer():
    team = [mk("a", "ally", 0, 40), mk("b", "ally", 1, 120), mk("c", "opponent", 0, 80)]
    s = TurnScheduler()
    s.initialize(team)
    for _ in range(30):
        expected = s.upcoming[1]
        nxt, display = s.advance()
        assert nxt is expected
        assert display[0] is nxt
        assert len(display) == 6
        assert len(s.upcoming) >= 20


def test_defeated_combatant_leaves_queue_and_survivors_keep_bars():
    a = mk("a", "ally", 0, 300)
    b = mk("b", "opponent", 0, 100)
    c = mk("c", "opponent", 1, 80)
    s = TurnScheduler()
    s.initialize([a, b, c])
    before = s.bar(a)
    b.take_damage(500)
    s.on_combatant_defeated(b)
    assert s.bar(b) is None
    assert s.bar(a) == before
    assert "b-E" not in keys(s.upcoming)
    assert s.peek_current() is a


def test_nobody_alive_means_empty_queue():
    a = mk("a", "ally", 0, 100)
    s = TurnScheduler()
    s.initialize([a])
    a.take_damage(1000)
    s.on_combatant_defeated(a)
    assert s.peek_current() is None
    assert s.upcoming == []
    assert s.advance() == (None, [])


def test_one_ally_two_opponents_tie():
    team = [mk("o2", "opponent", 1, 80), mk("o1", "opponent", 0, 80), mk("al", "ally", 0, 80)]
    s = TurnScheduler()
    s.initialize(team)
    assert keys(s.upcoming[:3]) == ["al-P", "o1-E", "o2-E"]
