# infrastructure/document/jsonpath_evaluator.py
from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as jsonpath_parse
from jsonpath_ng.jsonpath import Child, Fields, Index, JSONPath, Root, This

from reststeps.application.ports.document import JsonPathPort
from reststeps.domain.exceptions import PathNotFoundError, ResolutionError


@lru_cache(maxsize=256)
def _compile(path: str) -> JSONPath:
    try:
        return jsonpath_parse(path)
    except JSONPathError as e:
        raise ResolutionError(f"Invalid JSONPath {path!r}: {e}") from e


def is_definite(expr: JSONPath) -> bool:
    """
    A definite path selects at most one node: only root, single field names
    and single indexes. Wildcards, filters, slices, unions and recursive
    descent are indefinite.
    """
    if isinstance(expr, (Root, This)):
        return True
    if isinstance(expr, Child):
        return is_definite(expr.left) and is_definite(expr.right)
    if isinstance(expr, Fields):
        return len(expr.fields) == 1 and expr.fields[0] != "*"
    if isinstance(expr, Index):
        indices = getattr(expr, "indices", None)
        return indices is None or len(indices) == 1
    return False


class JsonPathNgEvaluator(JsonPathPort):
    """
    Definite paths yield the single value and raise PathNotFoundError when
    nothing matches. Indefinite paths yield the list of matches, possibly empty.
    """

    def read(self, document: str, path: str) -> Any:
        try:
            data = json.loads(document)
        except (TypeError, ValueError) as e:
            raise ResolutionError(f"Response body is not valid JSON: {e}") from e

        expr = _compile(path)
        matches = [m.value for m in expr.find(data)]

        if not is_definite(expr):
            return matches
        if not matches:
            raise PathNotFoundError(path)
        return matches[0]
