"""
Storefront API - Echo Function
================================

What:  Serverless-style handler that echoes a keyword in a fixed sentence.
How:   API-gateway proxy event in, `{statusCode, body}` out. The body is
       plain text, not JSON.

Example:
    handler({"queryStringParameters": {"keyword": "hello"}})
    → {"statusCode": 200, "body": "Serina Oswalt says hello"}
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SPEAKER = "Serina Oswalt"
DEFAULT_KEYWORD = "nothing"


def build_message(keyword: str) -> str:
    return f"{SPEAKER} says {keyword}"


def handler(event: Dict[str, Any], context: Optional[Any] = None) -> Dict[str, Any]:
    """
    Echo function entry point.

    Args:
        event: Proxy event; `queryStringParameters` may be missing or None
        context: Runtime context object (unused)

    Returns:
        {"statusCode": 200, "body": "<speaker> says <keyword>"}
    """
    params = event.get("queryStringParameters") or {}
    keyword = params.get("keyword") or DEFAULT_KEYWORD
    logger.debug("Echo function invoked with keyword=%r", keyword)
    return {
        "statusCode": 200,
        "body": build_message(keyword),
    }
