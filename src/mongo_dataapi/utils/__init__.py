from .formatting import english_enumerate, quote_keys  # noqa
