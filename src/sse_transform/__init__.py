import subprocess
import sys

from sse_transform.encoder import encode
from sse_transform.parser import parse
from sse_transform.stream import SseTransform
from sse_transform.stream import SseTransformOptions

__all__ = ["SseTransform", "SseTransformOptions", "encode", "parse"]


def check() -> None:
    sys.exit(subprocess.run(["poe", "check"]).returncode)


def fix() -> None:
    sys.exit(subprocess.run(["poe", "fix"]).returncode)


def test() -> None:
    sys.exit(subprocess.run(["poe", "test"]).returncode)
