# infrastructure/document/xpath_evaluator.py
from __future__ import annotations

import math

from lxml import etree

from reststeps.application.ports.document import XPathPort
from reststeps.domain.exceptions import ResolutionError


class LxmlXPathEvaluator(XPathPort):
    def __init__(self) -> None:
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True)

    def has_xpath(self, document: str, expression: str) -> bool:
        try:
            root = etree.fromstring((document or "").encode("utf-8"), parser=self._parser)
        except etree.XMLSyntaxError as e:
            raise ResolutionError(f"Response body is not valid XML: {e}") from e

        try:
            result = root.xpath(expression)
        except etree.XPathError as e:
            raise ResolutionError(f"Invalid XPath {expression!r}: {e}") from e

        # node-sets must be non-empty, scalar results must be "truthy"
        if isinstance(result, list):
            return len(result) > 0
        if isinstance(result, bool):
            return result
        if isinstance(result, float):
            return not math.isnan(result)
        return bool(result)
