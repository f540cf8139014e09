from schemagen.output.filesystem import FileSystemSink
from schemagen.output.memory import InMemorySink

__all__ = [
    "FileSystemSink",
    "InMemorySink",
]
