import pytest

from privfacility.pipeline import CSV_HEADER
from privfacility.size_benchmark import main, run_sizes


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_run_sizes_averages_per_size(workdir):
    results = run_sizes(1, 10, 30, 40, 0.5, 0.5, 1.0, 0.1, 0.1, 1.0, 1.0, 2.0, False)
    assert [r.instance_size for r in results] == [30, 40]
    for result in results:
        assert result.instance_name == ""
        assert result.opt_sol_name == "-"
        assert result.reconn_validity is True
        assert result.no_reconn_validity is False
        assert all(cost >= 0 for cost in result.opt_costs)


def test_run_sizes_empty_range(workdir):
    assert run_sizes(1, 10, 50, 40, 0.5, 0.5, 1.0, 0.1, 0.1, 1.0, 1.0, 2.0, False) == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"instance_amount": 0},
        {"eps": 0.0},
        {"alpha": -1.0},
        {"delta": 0.0},
        {"f_min": -1.0},
        {"n_step": 0},
    ],
)
def test_run_sizes_rejects_invalid_arguments(workdir, overrides):
    kwargs = dict(
        instance_amount=1, n_step=10, n_min=30, n_max=30, width=0.5, height=0.5, eps=1.0,
        alpha=0.1, delta=0.1, gamma=1.0, f_min=1.0, f_max=2.0, save_output=False,
    )
    kwargs.update(overrides)
    with pytest.raises(ValueError):
        run_sizes(**kwargs)


def test_main_rejects_wrong_argument_count(workdir):
    assert main(["1", "2"]) == 1


def test_main_rejects_non_positive_eps(workdir):
    args = ["1", "10", "30", "30", "0.5", "0.5", "0", "0.1", "0.1", "1", "1", "2"]
    assert main(args) == 1


def test_main_writes_csv(workdir):
    args = ["1", "10", "30", "30", "0.5", "0.5", "1", "0.1", "0.1", "1", "1", "2"]
    assert main(args) == 0
    files = list((workdir / "instance_size_n" / "out").iterdir())
    assert len(files) == 1
    assert files[0].name.startswith("30_30_10_")
    lines = files[0].read_text().splitlines()
    assert lines[0] == CSV_HEADER
    assert len(lines) == 2
    assert lines[1].startswith(",30,-,")