from reststeps.infrastructure.document.jsonpath_evaluator import JsonPathNgEvaluator
from reststeps.infrastructure.document.xpath_evaluator import LxmlXPathEvaluator

__all__ = [
    "JsonPathNgEvaluator",
    "LxmlXPathEvaluator",
]
