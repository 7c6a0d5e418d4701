import re


CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def normalize_response(raw: str) -> str:
    """Unwrap the first fenced code block in place and trim the result.

    Only the first fence is removed, so the function is idempotent for text
    holding at most one fenced block. With two or more fences each call
    unwraps one more of them.
    """
    if not raw:
        return ""
    return CODE_FENCE_RE.sub(r"\1", raw, count=1).strip()
