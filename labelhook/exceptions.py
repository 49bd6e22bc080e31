class BaseLabelhookException(Exception):
    """
    Base exception that can take an error message and context information.
    """

    message: str
    context: dict
    default_message = "An error occurred."

    def __init__(self, message: str = default_message, **kwargs):
        self.message = message.format(**kwargs)
        self.context = dict(**kwargs)
        super().__init__()

    def __str__(self):
        return str(dict(message=self.message, context=self.context))

    def update_context(self, **kwargs):
        self.context.update(dict(**kwargs))


class ProtocolError(BaseLabelhookException):
    pass


class UnsupportedMediaTypeError(ProtocolError):
    pass


class EmptyBodyError(ProtocolError):
    pass


class MalformedEnvelopeError(ProtocolError):
    pass


class MissingRequestSectionError(ProtocolError):
    pass


class PolicyInputError(BaseLabelhookException):
    pass


class UnsupportedKindError(PolicyInputError):
    pass


class UnparsableObjectError(PolicyInputError):
    pass


class DiffError(BaseLabelhookException):
    pass


class DiffComputationError(DiffError):
    pass


class EncodingError(BaseLabelhookException):
    pass


class InvalidConfigurationFormatError(BaseLabelhookException):
    pass
