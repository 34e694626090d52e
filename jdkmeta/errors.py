from typing import Optional


class JdkMetaError(Exception):
    """
    Base for every failure the catalog run knows how to report.

    The optional context is kept as attributes so a report can be rebuilt
    without querying the upstream again. `url` is rendered separately by
    `format_error_chain`, the rest is folded into the message.
    """

    def __init__(
        self,
        message: str,
        vendor: Optional[str] = None,
        feature_version: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.vendor = vendor
        self.feature_version = feature_version
        self.url = url

    def __str__(self):
        context = []
        if self.vendor is not None:
            context.append(f"vendor={self.vendor}")
        if self.feature_version is not None:
            context.append(f"feature_version={self.feature_version}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class TransportError(JdkMetaError):
    pass


class NoCandidatesError(JdkMetaError):
    pass


class MissingPointerError(JdkMetaError):
    def __init__(self, message: str, pointer: str, **kwargs):
        super().__init__(message, **kwargs)
        self.pointer = pointer


class HashingError(JdkMetaError):
    pass


class SchemaError(JdkMetaError):
    pass
