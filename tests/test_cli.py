import yaml

from mealplan_generator import main
from tests.conftest import read

SETTINGS = {
    "meals_per_week": 4,
    "days_of_week": ["Monday", "Tuesday", "Wednesday", "Thursday"],
}


def run(vault_dir, *args):
    return main(["--vault", str(vault_dir), "--settings", str(vault_dir / "meal_planner.yaml"), *args])


def test_generate_then_edit(vault_dir, monkeypatch, capsys):
    monkeypatch.chdir(vault_dir)
    (vault_dir / "meal_planner.yaml").write_text(yaml.safe_dump(SETTINGS), encoding="utf-8")

    assert run(vault_dir, "--seed", "3", "generate") == 0
    out = capsys.readouterr().out
    assert "[info] Using fixed seed: 3" in out

    saved = yaml.safe_load(read(vault_dir / "meal_planner.yaml"))
    plan_path = vault_dir / saved["current_plan_path"]
    assert plan_path.is_file()

    assert run(vault_dir, "entries") == 0
    listing = capsys.readouterr().out
    assert "Week 1 Monday:" in listing and "Week 1 Thursday:" in listing

    assert run(vault_dir, "change", "--day", "Tuesday", "--recipe", "Curry") == 0
    assert "[[Curry]]" in read(plan_path)
    capsys.readouterr()

    assert run(vault_dir, "swap", "--day", "Monday", "--with-day", "Tuesday") == 0
    assert "Swapped meals between 'Monday (Week 1)' and 'Tuesday (Week 1)'!" in capsys.readouterr().out
    assert "- [ ] **🌙 Monday** - [[Curry]]" in read(plan_path)


def test_errors_exit_with_status_one(vault_dir, monkeypatch, capsys):
    monkeypatch.chdir(vault_dir)
    (vault_dir / "meal_planner.yaml").write_text(yaml.safe_dump(SETTINGS), encoding="utf-8")

    assert run(vault_dir, "entries") == 1
    assert "[error] No active meal plan found." in capsys.readouterr().out

    assert run(vault_dir, "generate") == 0
    assert run(vault_dir, "change", "--day", "Monday", "--recipe", "Pancakes") == 1
    assert "[error] Recipe 'Pancakes' not found." in capsys.readouterr().out


def test_generate_saves_to_named_settings_file_even_when_missing(vault_dir, monkeypatch, capsys):
    monkeypatch.chdir(vault_dir)
    target = vault_dir / "config" / "plans.yaml"

    assert main(["--vault", str(vault_dir), "--settings", str(target), "--seed", "1", "generate"]) == 0
    assert "[warn] Settings file" in capsys.readouterr().out

    saved = yaml.safe_load(read(target))
    assert (vault_dir / saved["current_plan_path"]).is_file()
    assert not (vault_dir / "meal_planner.yaml").exists()
