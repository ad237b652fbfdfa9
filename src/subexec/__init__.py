"""subexec: run external executables without hand-rolled process plumbing."""

from .environment import env_with_overrides
from .errors import ExecutionError
from .executor import call, check_call, check_output, run
from .models import InvocationRequest, ProcessHandle
from .quoting import args, quote, split_args

__all__ = [
    "ExecutionError",
    "InvocationRequest",
    "ProcessHandle",
    "__version__",
    "args",
    "call",
    "check_call",
    "check_output",
    "env_with_overrides",
    "quote",
    "run",
    "split_args",
]

__version__ = "0.1.0"
