class BadConfigError(Exception):
    """
    Raised when a config file is misformatted or mis-typed.
    """
    pass


class MountSpecError(ValueError):
    """
    Base class for everything that can go wrong while parsing a mount
    specification. `field` is the offending piece of input, verbatim.
    """

    def __init__(self, message, field=None):
        super(MountSpecError, self).__init__(message)
        self.message = message
        self.field = field

    def __str__(self):
        return self.message

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self)


class MalformedInputError(MountSpecError):
    """
    Raised when the raw string is not a single well-formed CSV record.
    """

    def __init__(self, raw, reason):
        super(MalformedInputError, self).__init__(
            "invalid mount specification '{}': {}".format(raw, reason),
            field=raw,
        )
        self.reason = reason


class MissingValueError(MountSpecError):
    """
    Raised when a key that needs a value is given on its own.
    """

    def __init__(self, key, field):
        super(MissingValueError, self).__init__(
            "invalid field '{}' must be a key=value pair".format(field),
            field=field,
        )
        self.key = key


class UnknownKeyError(MountSpecError):
    """
    Raised for keys the parser does not recognize.
    """

    def __init__(self, key, field, suggestion=None):
        message = "unexpected key '{}' in '{}'".format(key, field)
        if suggestion:
            message += ", did you mean '{}'?".format(suggestion)
        super(UnknownKeyError, self).__init__(message, field=field)
        self.key = key
        self.suggestion = suggestion


class InvalidValueError(MountSpecError):
    """
    Raised when a recognized key carries a value of the wrong type or format.
    """

    def __init__(self, key, value, field):
        super(InvalidValueError, self).__init__(
            "invalid value for {}: {} in '{}'".format(key, value, field),
            field=field,
        )
        self.key = key
        self.value = value


class MissingTargetError(MountSpecError):
    def __init__(self, field):
        super(MissingTargetError, self).__init__(
            "target is required in '{}'".format(field),
            field=field,
        )


class MissingTypeError(MountSpecError):
    def __init__(self, field):
        super(MissingTypeError, self).__init__(
            "type is required in '{}'".format(field),
            field=field,
        )


class ConflictingOptionsError(MountSpecError):
    """
    Raised when volume-* options are used on a bind mount or bind-* options
    on a volume mount.
    """

    def __init__(self, kind, prefix, field):
        super(ConflictingOptionsError, self).__init__(
            "cannot mix '{}-*' options with mount type '{}' in '{}'".format(prefix, kind, field),
            field=field,
        )
        self.kind = kind
        self.prefix = prefix
