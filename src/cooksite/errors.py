class CooksiteError(Exception):
    pass


class ConfigError(CooksiteError):
    pass


class MissingFileError(CooksiteError):
    pass


class RendererError(CooksiteError):
    pass


class WatchError(CooksiteError):
    pass
