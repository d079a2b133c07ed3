class DbcQuoteError(Exception):
    pass


class InvalidAmountError(DbcQuoteError):
    pass


class ArithmeticOverflowError(DbcQuoteError):
    pass


class ArithmeticUnderflowError(DbcQuoteError):
    pass


class CurveExhaustedError(DbcQuoteError):
    pass


class PoolCompletedError(CurveExhaustedError):
    pass


class ConfigurationInvariantViolated(DbcQuoteError):
    pass


class AccountNotFoundError(DbcQuoteError):
    pass


class AccountDecodeError(DbcQuoteError):
    pass


class RpcResponseError(DbcQuoteError):
    pass
