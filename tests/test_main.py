import pytest

from undercroft.__main__ import main


def test_prints_map_and_summary(capsys):
    main(["--rooms", "1", "--seed", "3"])
    out = capsys.readouterr().out.splitlines()

    summary = out[-1]
    assert summary.startswith("seed=3 rooms=1/1 corridors=0 ")
    assert "floor_regions=1" in summary
    assert out[0].startswith("┌")
    assert out[-2].startswith("└")


def test_rejects_negative_room_count(capsys):
    with pytest.raises(SystemExit):
        main(["--rooms", "-2"])
    assert "non-negative" in capsys.readouterr().err
