"""Failure taxonomy of the quiz generation pipeline.

Every kind maps to its own reported outcome at the HTTP boundary, so callers
can tell bad input apart from a flaky upstream or unusable content.
"""


class QuizPipelineError(Exception):
    code = "pipeline_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(QuizPipelineError):
    """Missing or invalid request fields. Raised before any stage runs."""

    code = "input_error"
    status_code = 400


class QuizNotFound(QuizPipelineError):
    code = "not_found"
    status_code = 404


class UpstreamError(QuizPipelineError):
    """Generative backend unreachable, errored or returned no content."""

    code = "upstream_error"
    status_code = 502


class ParseFailure(QuizPipelineError):
    """No parser stage could recover question structure.

    ``raw_text`` is kept for offline inspection and never sent to the client.
    """

    code = "parse_failure"
    status_code = 502

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class ValidationExhaustion(QuizPipelineError):
    """Structure was recovered but every candidate was dropped."""

    code = "validation_exhausted"
    status_code = 422

    def __init__(self, message: str, report=None):
        super().__init__(message)
        self.report = report


class PersistenceError(QuizPipelineError):
    code = "persistence_error"
    status_code = 500

    def __init__(self, message: str, step: str = ""):
        super().__init__(message)
        self.step = step


class JoinCodeCapacityError(QuizPipelineError):
    """Could not find a free join code within the retry bound."""

    code = "join_code_capacity"
    status_code = 503
