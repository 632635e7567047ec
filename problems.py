# Built-in formula set.
# Each entry lists the formula, the quantities it contains and the precomputed
# rearrangement for every quantity a learner may be asked to isolate.
# Extra formulas can be dropped into data/formulas/ (see bank.py).

from engine.tree import FRACTION_TOKEN, SQRT_TOKEN, SQUARE_TOKEN

STANDARD_SYMBOLS = ["+", "-", "*", "(", ")", SQUARE_TOKEN, SQRT_TOKEN, FRACTION_TOKEN]

FORMULAS = [
    {
        "formula": "θ = s / r",
        "variables": ["θ", "s", "r"],
        "answers": {"s": "s = θ * r", "r": "r = s / θ"},
    },
    {
        "formula": "a = r * α",
        "variables": ["a", "r", "α"],
        "answers": {"r": "r = a / α", "α": "α = a / r"},
    },
    {
        "formula": "Fz = m * g",
        "variables": ["Fz", "m", "g"],
        "answers": {"m": "m = Fz / g", "g": "g = Fz / m"},
    },
    {
        "formula": "Epot = m*g*h",
        "variables": ["Epot", "m", "g", "h"],
        "answers": {
            "m": "m = Epot / (g * h)",
            "g": "g = Epot / (m * h)",
            "h": "h = Epot / (m * g)",
        },
    },
    {
        "formula": "p = F / A",
        "variables": ["p", "F", "A"],
        "answers": {"F": "F = p * A", "A": "A = F / p"},
    },
    {
        "formula": "phydro = ρ*g*h",
        "variables": ["phydro", "ρ", "g", "h"],
        "answers": {
            "ρ": "ρ = phydro / (g * h)",
            "g": "g = phydro / (ρ * h)",
            "h": "h = phydro / (ρ * g)",
        },
    },
    {
        "formula": "R = U / I",
        "variables": ["R", "U", "I"],
        "answers": {"U": "U = R * I", "I": "I = U / R"},
    },
    {
        "formula": "Q = m*c*ΔT",
        "variables": ["Q", "m", "c", "ΔT"],
        "answers": {
            "m": "m = Q / (c * ΔT)",
            "c": "c = Q / (m * ΔT)",
            "ΔT": "ΔT = Q / (m * c)",
        },
    },
    {
        "formula": "E = m * c^2",
        "variables": ["E", "m", "c"],
        "answers": {"m": "m = E / c^2", "c": "c = sqrt(E / m)"},
    },
    {
        "formula": "v = Δx / Δt",
        "variables": ["v", "Δx", "Δt"],
        "answers": {"Δx": "Δx = v * Δt", "Δt": "Δt = Δx / v"},
    },
    {
        "formula": "ρ = m / v",
        "variables": ["ρ", "m", "v"],
        "answers": {"m": "m = ρ * v", "v": "v = m / ρ"},
    },
]

# Dealt when nothing valid can be drawn from the bank.
FALLBACK_PROBLEM = {
    "original_formula": "F = m * a",
    "target_variable": "a",
    "correct_answer": "a = F / m",
    "symbols": ["F", "m", "a", "*", "/", "+", "-", "(", ")", SQUARE_TOKEN, SQRT_TOKEN, FRACTION_TOKEN],
}
