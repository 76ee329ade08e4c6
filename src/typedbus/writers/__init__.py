from .console_writer import ConsoleWriter

__all__: list[str] = ["ConsoleWriter"]
