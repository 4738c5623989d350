class LispyError(Exception):
    """ Base class for all host-level Lispy errors"""
    pass

class LispySyntaxError(LispyError):
    """ Raised by the reader when source text does not match the grammar"""

    def __init__(self, message: str, filename: str = "<stdin>", line: int = 1, column: int = 1):
        super().__init__(f"{filename}:{line}:{column}: error: {message}")
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column

class LispyConfigError(LispyError):
    """ Raised when a configuration value read from the environment is invalid"""
