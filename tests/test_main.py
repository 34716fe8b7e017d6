"""Tests for the command-line dispersion table printer."""

from bending_light.__main__ import main


def test_prints_red_indices_and_table(capsys):
    main()
    out = capsys.readouterr().out
    assert "Air -> 1.000293" in out
    assert "Diamond -> 2.419000" in out
    assert "Wavelength\tAir\tWater\tGlass\tDiamond" in out
    assert "350.0 nm\t" in out
    assert "800.0 nm\t" in out
    assert sum(1 for line in out.splitlines() if " nm\t" in line) == 101
