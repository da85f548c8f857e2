from __future__ import annotations


class AddrParseError(ValueError):
    '''
    An address or network literal could not be parsed.
    '''


class ParseError(Exception):
    '''
    Base class for every error raised while parsing resolv.conf,
    `line` is the 0-based index of the offending line.
    '''
    message = 'line {line} could not be parsed'

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(self.describe())

    def describe(self) -> str:
        return self.message.format(line=self.line)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(line={self.line})'


class InvalidUtf8(ParseError):
    '''
    A non-comment line contains invalid UTF-8 sequences.
    '''
    message = 'bad unicode at line {line}: {cause}'

    def __init__(self, line: int, cause: UnicodeDecodeError) -> None:
        self.cause = cause
        super().__init__(line)

    def describe(self) -> str:
        return self.message.format(line=self.line, cause=self.cause)


class InvalidValue(ParseError):
    '''
    A directive value is missing or malformed.
    '''
    message = (
        'directive at line {line} is improperly formatted '
        'or contains invalid value'
    )


class InvalidOptionValue(ParseError):
    message = 'directive options at line {line} contains invalid value of some option'


class InvalidOption(ParseError):
    message = 'option at line {line} is not recognized'


class InvalidDirective(ParseError):
    message = 'directive at line {line} is not recognized'


class InvalidIp(ParseError):
    '''
    An address or network literal failed to parse, `cause`
    holds the underlying AddrParseError.
    '''
    message = 'directive at line {line} contains invalid IP: {cause}'

    def __init__(self, line: int, cause: AddrParseError) -> None:
        self.cause = cause
        super().__init__(line)

    def describe(self) -> str:
        return self.message.format(line=self.line, cause=self.cause)


class ExtraData(ParseError):
    message = 'extra data at the end of the line {line}'
