"""Standard-library catalogue and stdlib / third-party classification."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple

from .models import STDLIB, THIRD_PARTY, ImportKind

# Python 3 standard library root modules.
# Source: https://docs.python.org/3/py-modindex.html, plus a few private
# modules that show up in real code.
STDLIB_MODULES: FrozenSet[str] = frozenset({
    # Text processing
    "string", "re", "difflib", "textwrap", "unicodedata", "stringprep", "readline", "rlcompleter",
    # Binary data
    "struct", "codecs",
    # Data types
    "datetime", "zoneinfo", "calendar", "collections", "heapq", "bisect", "array", "weakref",
    "types", "copy", "pprint", "reprlib", "enum", "graphlib",
    # Numeric and math
    "numbers", "math", "cmath", "decimal", "fractions", "random", "statistics",
    # Functional programming
    "itertools", "functools", "operator",
    # Files, directories and generic OS services
    "pathlib", "os", "io", "time", "argparse", "getopt", "logging", "getpass", "curses",
    "platform", "errno", "ctypes", "glob", "fnmatch", "linecache", "shutil", "tempfile",
    "fileinput", "stat", "filecmp", "mmap",
    # File formats
    "csv", "configparser", "tomllib", "netrc", "plistlib",
    # Cryptographic services
    "hashlib", "hmac", "secrets",
    # Unix services
    "sys", "syslog", "pty", "tty", "termios", "resource", "sysconfig", "fcntl", "grp", "pwd",
    "posix", "posixpath", "ntpath", "genericpath",
    # Windows services
    "nt", "msvcrt", "winreg", "winsound",
    # Concurrency
    "threading", "multiprocessing", "concurrent", "subprocess", "sched", "queue", "contextvars",
    # Networking and IPC
    "asyncio", "socket", "ssl", "select", "selectors", "signal",
    # Internet data handling
    "email", "json", "mailbox", "mimetypes", "base64", "binascii", "quopri",
    # Structured markup
    "html", "xml",
    # Internet protocols
    "webbrowser", "wsgiref", "urllib", "http", "ftplib", "poplib", "imaplib", "smtplib",
    "telnetlib", "uuid", "socketserver", "xmlrpc", "ipaddress",
    # Multimedia
    "wave", "colorsys",
    # Internationalization
    "gettext", "locale",
    # Program frameworks
    "turtle", "cmd", "shlex",
    # GUI
    "tkinter", "idlelib",
    # Development tools
    "typing", "pydoc", "doctest", "unittest", "test", "lib2to3",
    # Debugging and profiling
    "bdb", "faulthandler", "pdb", "timeit", "trace", "tracemalloc", "cProfile", "profile", "pstats",
    # Packaging and distribution
    "venv", "zipapp", "ensurepip",
    # Runtime services
    "builtins", "warnings", "dataclasses", "contextlib", "abc", "atexit", "traceback", "gc",
    "inspect", "site",
    # Importing
    "importlib", "zipimport", "pkgutil", "modulefinder", "runpy",
    # Language services
    "parser", "ast", "symtable", "symbol", "token", "keyword", "tokenize", "tabnanny",
    "pyclbr", "py_compile", "compileall", "dis", "pickletools",
    # Misc
    "formatter", "__future__", "code", "codeop",
    # Compression and archiving
    "zlib", "gzip", "bz2", "lzma", "zipfile", "tarfile",
    # Persistence
    "pickle", "copyreg", "shelve", "marshal", "dbm", "sqlite3",
    # Undocumented but common
    "_thread", "__main__", "_collections_abc", "_io",
})


def is_stdlib_module(name: str, catalogue: FrozenSet[str] = STDLIB_MODULES) -> bool:
    """Return True if the root of *name* is a standard-library module.

    Total: empty or unknown names are third-party (False).
    """
    return name.split(".", 1)[0] in catalogue


def classify(name: str, catalogue: FrozenSet[str] = STDLIB_MODULES) -> ImportKind:
    return STDLIB if is_stdlib_module(name, catalogue) else THIRD_PARTY


def split_imports(
    names: Iterable[str],
    catalogue: FrozenSet[str] = STDLIB_MODULES,
) -> Tuple[List[str], List[str]]:
    """Partition *names* into ``(stdlib, third_party)``, keeping input order."""
    stdlib: List[str] = []
    third_party: List[str] = []
    for name in names:
        (stdlib if is_stdlib_module(name, catalogue) else third_party).append(name)
    return stdlib, third_party
