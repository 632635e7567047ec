import json
import random

import pytest

import bank
from bank import (
    FormulaBank,
    build_palette,
    deal_problem,
    fallback_problem,
    find_formula,
    get_formulas,
    rearrangement_targets,
    verify_rearrangement,
)
from problems import FORMULAS


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(bank, "_DATA_DIR", tmp_path)
    monkeypatch.setattr(FormulaBank, "_formulas", [])
    yield tmp_path
    # leave the built-in set loaded for the other tests
    monkeypatch.undo()
    FormulaBank.reload()


@pytest.mark.parametrize("entry", FORMULAS, ids=[e["formula"] for e in FORMULAS])
def test_builtin_answers_verify(entry):
    for target, answer in entry["answers"].items():
        assert verify_rearrangement(entry["formula"], target, answer, entry["variables"]), answer


def test_wrong_answers_are_rejected():
    assert not verify_rearrangement("Fz = m * g", "m", "m = g / Fz")
    assert not verify_rearrangement("Fz = m * g", "m", "g = Fz / m")
    assert not verify_rearrangement("E = m * c^2", "c", "c = E / m")
    assert not verify_rearrangement("not a formula", "m", "m = 1")


def test_all_builtins_loaded():
    assert len(get_formulas()) == len(FORMULAS)
    assert find_formula("Fz = m * g")["answers"]["g"] == "g = Fz / m"
    assert find_formula("nope") is None


def test_targets_skip_solved_variable():
    entry = find_formula("Epot = m*g*h")
    assert rearrangement_targets(entry) == ["m", "g", "h"]


def test_palette_offers_square_tile():
    palette = build_palette(find_formula("E = m * c^2"))
    assert {"E", "m", "c", "__square__", "__sqrt__", "__fraction__"} <= set(palette)
    assert "^2" not in palette
    assert len(palette) == len(set(palette))


def test_seeded_deal_is_reproducible():
    a = deal_problem(rng=random.Random(7))
    b = deal_problem(rng=random.Random(7))
    assert a == b
    entry = find_formula(a.original_formula)
    assert a.correct_answer == entry["answers"][a.target_variable]
    assert a.target_variable in a.symbols


def test_deal_pinned_formula_and_target():
    p = deal_problem(formula="R = U / I", target="I")
    assert p.correct_answer == "I = U / R"


def test_deal_falls_back():
    assert deal_problem(formula="x = y") == fallback_problem()
    assert deal_problem(formula="R = U / I", target="R") == fallback_problem()
    fb = fallback_problem()
    assert fb.original_formula == "F = m * a" and fb.correct_answer == "a = F / m"


def test_data_dir_replaces_builtins(data_dir):
    (data_dir / "mechanics.jsonl").write_text(
        "\n".join(
            [
                "# comment lines are skipped",
                json.dumps({"formula": "W = F * s", "variables": ["W", "F", "s"], "answers": {"s": "s = W / F"}}),
                "{broken",
                json.dumps({"formula": "P = W / t", "variables": ["P", "W", "t"], "answers": {"t": "t = P * W"}}),
            ]
        ),
        encoding="utf-8",
    )
    (data_dir / "extra.json").write_text(
        json.dumps([{"formula": "v = s / t", "variables": ["v", "s", "t"], "answers": {"t": "t = s / v"}}]),
        encoding="utf-8",
    )
    formulas = get_formulas()
    # the P = W / t entry carries a wrong answer and is dropped entirely
    assert sorted(e["formula"] for e in formulas) == ["W = F * s", "v = s / t"]


def test_empty_data_dir_keeps_builtins(data_dir):
    (data_dir / "notes.txt").write_text("not a formula file", encoding="utf-8")
    assert bank.reload_bank() == len(FORMULAS)
