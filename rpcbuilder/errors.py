class RPCBuilderError(Exception):
    pass


class ValidationError(RPCBuilderError, ValueError):
    pass


class ExternalCallError(RPCBuilderError, RuntimeError):
    pass
