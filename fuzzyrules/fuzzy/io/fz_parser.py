"""
Grammar (short):
  model <name>
  var (input|output) <name>
  mf  <var> <term> (tri a b c | trap a b c d)
  rule if <premise> then <conclusion>     # rest of the line is the rule text
  steps <n>

Notes:
- Directives are case-insensitive; variable and term names are lowercased by the engine.
- Rule text is kept as written and validated by the rule parser when the engine is set up.
- '#' starts a comment, except inside a rule line where it ends the rule text.
"""

from __future__ import annotations
from typing import List
import shlex

from ..core.types import FuzzyError
from ..model.knowledge import FuzzyModel, Term, Variable


class FZParseError(FuzzyError):
    def __init__(self, msg: str, line: int, content: str):
        super().__init__(f"[.fz:{line}] {msg}\n  >> {content}")
        self.line = line


_SHAPES = {"tri", "trap"}


def _lex_line(raw: str) -> List[str]:
    """Tokenize a line: supports '#' comments and quotes."""
    lx = shlex.shlex(raw, posix=True)
    lx.whitespace_split = True
    lx.commenters = "#"
    return list(lx)


def _rule_text(raw: str) -> str:
    text = raw.strip()[len("rule"):]
    if "#" in text:
        text = text[:text.index("#")]
    return text.strip()


def parse_fz(path: str) -> FuzzyModel:
    with open(path, "r", encoding="utf-8") as f:
        src = f.read()
    return parse_fz_string(src)


def parse_fz_string(source: str) -> FuzzyModel:
    model = FuzzyModel()
    lines = source.splitlines()

    for lineno, raw in enumerate(lines, 1):
        try:
            tokens = _lex_line(raw)
        except ValueError as e:
            raise FZParseError(str(e), lineno, raw) from e
        if not tokens:
            continue
        head = tokens[0].lower()

        try:
            if head == "model":
                if len(tokens) != 2:
                    raise FZParseError("model: expected 'model <name>'", lineno, raw)
                model.name = tokens[1]

            elif head == "steps":
                if len(tokens) != 2:
                    raise FZParseError("steps: expected 'steps <n>'", lineno, raw)
                steps = int(tokens[1])
                if steps < 1:
                    raise FZParseError(f"steps: positive number required (got {steps})", lineno, raw)
                model.steps = steps

            elif head == "var":
                # var input|output name
                if len(tokens) != 3:
                    raise FZParseError("var: expected 'var (input|output) <name>'", lineno, raw)
                kind = tokens[1].lower()
                name = tokens[2]
                if kind not in ("input", "output"):
                    raise FZParseError(f"Unknown var kind: {kind}", lineno, raw)
                if model.variable(name) is not None:
                    raise FZParseError(f"Duplicate variable: {name}", lineno, raw)
                model.add_variable(Variable(usage=kind, name=name))

            elif head == "mf":
                # mf vname label shape ...
                if len(tokens) < 4:
                    raise FZParseError("mf: expected 'mf <var> <term> <shape> [params...]'", lineno, raw)
                vname, label, shape = tokens[1], tokens[2], tokens[3].lower()
                target = model.variable(vname)
                if target is None:
                    raise FZParseError(f"MF for unknown variable: {vname}", lineno, raw)
                if any(t.name.lower() == label.lower() for t in target.terms):
                    raise FZParseError(f"Duplicate MF label '{label}' in variable '{vname}'", lineno, raw)
                if shape not in _SHAPES:
                    raise FZParseError(f"Unknown MF shape: {shape}", lineno, raw)

                if shape == "tri":
                    if len(tokens) != 7:
                        raise FZParseError("tri: expected 3 parameters: a b c", lineno, raw)
                    a, b, c = map(float, tokens[4:7])
                    if not (a <= b <= c):
                        raise FZParseError("tri: a <= b <= c required", lineno, raw)
                    target.add_term(Term.triangle(label, a, b, c))
                else:
                    if len(tokens) != 8:
                        raise FZParseError("trap: expected 4 parameters: a b c d", lineno, raw)
                    a, b, c, d = map(float, tokens[4:8])
                    if not (a <= b <= c <= d):
                        raise FZParseError("trap: a <= b <= c <= d required", lineno, raw)
                    target.add_term(Term.trapezoid(label, a, b, c, d))

            elif head == "rule":
                text = _rule_text(raw)
                if not text:
                    raise FZParseError("rule: expected 'rule if ... then ...'", lineno, raw)
                model.add_rule(text)

            else:
                raise FZParseError(f"Unknown directive: {tokens[0]}", lineno, raw)

        except FZParseError:
            raise
        except ValueError as e:
            raise FZParseError(str(e), lineno, raw) from e

    if not model.output_variables:
        raise FZParseError("No output variable (var output ...)", line=len(lines), content="<eof>")
    return model
