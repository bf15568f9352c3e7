from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from .config import find_config, load_config
from .engine import format_file, format_string
from .errors import SurfmtUserError
from .types import FormatOptions
from .version import tool_version

SOURCE_GLOB = "*.sface"

_LOG = logging.getLogger("surfmt")


def _setup_logging_once() -> None:
    if getattr(_setup_logging_once, "_inited", False):
        return
    _setup_logging_once._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if os.environ.get("SURFMT_DEBUG") else logging.INFO
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="surfmt",
        description="Formatter for Surface-style markup (.sface templates)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_format = sub.add_parser("format", help="Отформатировать файлы (по месту) или stdin")
    sp_format.add_argument(
        "paths",
        nargs="+",
        help="файлы, каталоги (ищутся *.sface рекурсивно) или - для stdin",
    )
    sp_format.add_argument(
        "--line-length",
        type=int,
        metavar="N",
        help="целевая длина строки (перекрывает конфиг; по умолчанию 98)",
    )
    sp_format.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="путь к .surfmt.yaml (по умолчанию ищется от текущего каталога вверх)",
    )
    sp_format.add_argument(
        "--stdout",
        action="store_true",
        help="печатать результат в stdout вместо перезаписи файлов",
    )
    return p


def _options(ns: argparse.Namespace) -> FormatOptions:
    if ns.line_length is not None and ns.line_length <= 0:
        raise ValueError(f"--line-length must be positive, got: {ns.line_length}")
    cfg_path: Optional[Path] = ns.config if ns.config is not None else find_config(Path.cwd())
    if ns.config is not None and not ns.config.is_file():
        raise ValueError(f"Config file not found: {ns.config}")
    return load_config(cfg_path).to_options(line_length=ns.line_length)


def _iter_sources(paths: List[str]) -> Iterator[Path]:
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            yield from sorted(path.rglob(SOURCE_GLOB))
        elif path.is_file():
            yield path
        else:
            raise ValueError(f"No such file or directory: {raw}")


def _run_format(ns: argparse.Namespace) -> int:
    options = _options(ns)

    if ns.paths == ["-"]:
        sys.stdout.write(format_string(sys.stdin.read(), options))
        return 0
    if "-" in ns.paths:
        raise ValueError("'-' (stdin) cannot be combined with other paths")

    for path in _iter_sources(ns.paths):
        try:
            result = format_file(path, options, write=not ns.stdout)
        except SurfmtUserError as e:
            raise SurfmtUserError(f"{path}: {e}") from e
        if ns.stdout:
            sys.stdout.write(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging_once()

    try:
        if ns.cmd == "format":
            return _run_format(ns)
    except SurfmtUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
