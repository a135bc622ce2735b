import argparse

import pytest

from boids import AgentKind
from main import main, parse_school, run_headless


def test_parse_school():
    assert parse_school("Piranha=4") == (AgentKind.PIRANHA, 4)
    assert parse_school("blue_goldfish=0") == (AgentKind.BLUE_GOLDFISH, 0)


@pytest.mark.parametrize("text", ["Piranha", "Shark=3", "Sunfish=many", "Sunfish=-1"])
def test_parse_school_rejects(text):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_school(text)


def test_run_headless(capsys):
    flock = run_headless({AgentKind.SUNFISH: 4, "Piranha": 2}, ticks=10, seed=3, report_every=5)
    assert len(flock) == 6
    assert flock.clock.ticks == 10

    out = capsys.readouterr().out
    assert "[Headless] 6 fish" in out
    assert "tick 5" in out
    assert "done" in out


def test_main_headless(capsys):
    main(["--headless", "--ticks", "3", "--seed", "1", "--school", "CoralGrouper=2", "--school", "CoralGrouper=1"])
    out = capsys.readouterr().out
    assert "[Headless] 3 fish" in out


def test_main_headless_empty_aquarium(capsys):
    main(["--headless", "--ticks", "1", "--school", "Sunfish=0"])
    assert "empty aquarium" in capsys.readouterr().out
