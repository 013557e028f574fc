from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "tableside"

_FRAMEWORKS = frozenset({"fastapi", "starlette", "uvicorn", "redis"})

# layer directory -> modules it may not import (a prefix also bans its submodules)
LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": _FRAMEWORKS
    | {
        "pydantic",
        "opentelemetry",
        "prometheus_client",
        "tableside.api",
        "tableside.application",
        "tableside.infrastructure",
        "tableside.config",
    },
    "application": _FRAMEWORKS
    | {
        "opentelemetry",
        "tableside.api",
        "tableside.infrastructure",
        "tableside.config",
    },
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str


def _is_banned(module: str, banned: Iterable[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in banned)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def scan(path: Path, banned: frozenset[str]) -> list[Violation]:
    files = [path] if path.is_file() else sorted(path.rglob("*.py"))
    violations: list[Violation] = []
    for file_path in files:
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
        violations.extend(
            Violation(file_path=file_path, line=line, module=module)
            for line, module in _imported_modules(tree)
            if _is_banned(module, banned)
        )
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keeps the domain and application layers free of outer-layer imports."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Extra path to check with the domain rules (repeatable). "
        "Without it, src/tableside/domain and src/tableside/application are checked.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        targets = [(Path(item), LAYER_RULES["domain"]) for item in args.path]
    else:
        targets = [(PACKAGE_ROOT / layer, banned) for layer, banned in LAYER_RULES.items()]

    violations = [violation for path, banned in targets for violation in scan(path, banned)]
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
