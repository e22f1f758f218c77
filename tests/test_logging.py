import io

from genebattle.core.logging import Logger


def test_threshold_and_line_format():
    buf = io.StringIO()
    log = Logger("INFO", stream=buf)
    log.debug("Hidden", x=1)
    log.info("SingleAttack", attacker="Red-P", eff=1.25, target=None)
    lines = buf.getvalue().splitlines()
    assert len(lines) == 1
    assert "[INFO] SingleAttack attacker=Red-P eff=1.25" in lines[0]
    assert "target" not in lines[0]


def test_set_level_and_stream():
    first, second = io.StringIO(), io.StringIO()
    log = Logger("ERROR", stream=first)
    log.warn("Quiet")
    log.set_level("DEBUG")
    log.set_stream(second)
    log.debug("Loud")
    assert first.getvalue() == ""
    assert "[DEBUG] Loud" in second.getvalue()
