class ThreadsError(Exception):
    pass


class ConfigError(ThreadsError):
    pass


class SourceError(ThreadsError):
    pass
