from __future__ import annotations

import pytest

from reststeps.domain.exceptions import ResolutionError
from reststeps.infrastructure.document import LxmlXPathEvaluator

DOC = "<users><user id='1'><name>admin</name></user></users>"


def test_node_sets_and_scalars() -> None:
    evaluator = LxmlXPathEvaluator()

    assert evaluator.has_xpath(DOC, "/users/user[@id='1']") is True
    assert evaluator.has_xpath(DOC, "/users/user[@id='2']") is False
    assert evaluator.has_xpath(DOC, "count(/users/user) = 1") is True
    assert evaluator.has_xpath(DOC, "string(/users/user/email)") is False


def test_malformed_document_or_expression() -> None:
    evaluator = LxmlXPathEvaluator()

    with pytest.raises(ResolutionError):
        evaluator.has_xpath('{"json": true}', "/a")
    with pytest.raises(ResolutionError):
        evaluator.has_xpath(DOC, "/users/[")
