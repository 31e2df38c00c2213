from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from gatsyntax.errors import GATError
from gatsyntax.result import Err, Ok, Result
from gatsyntax.serialization import loads
from gatsyntax.syntax import Syntax

logger = logging.getLogger(__name__)


def load_expr_from_file(path: str | Path, syntax: Syntax, **kwargs: Any) -> Result[Any, Exception]:
    """Read a JSON S-expression file and rebuild the expression in `syntax`.

    Keyword arguments are passed to `parse_json_sexpr`. Never raises for
    bad input: unreadable files, invalid JSON, unknown constructors, domain
    errors and ill-typed arguments all come back as `Err`.
    """
    try:
        text = Path(path).read_text()
    except OSError as e:
        return Err(e)

    try:
        expr = loads(syntax, text, **kwargs)
    except (GATError, TypeError, ValueError) as e:
        logger.debug("Could not rebuild %s in %s: %s", path, syntax.name, e)
        return Err(e)
    return Ok(expr)
