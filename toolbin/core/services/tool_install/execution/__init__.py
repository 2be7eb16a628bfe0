"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: subprocess calls, downloads,
archive extraction, search-path changes.
"""

from toolbin.core.services.tool_install.execution.archive import (  # noqa: F401
    extract_archive,
    is_archive,
)
from toolbin.core.services.tool_install.execution.binary_install import (  # noqa: F401
    BinaryStrategy,
    GithubReleaseStrategy,
    install_from_url,
    make_executable,
)
from toolbin.core.services.tool_install.execution.download import (  # noqa: F401
    download_file,
    filename_from_url,
)
from toolbin.core.services.tool_install.execution.package_managers import (  # noqa: F401
    CoursierStrategy,
    DotnetStrategy,
    GemStrategy,
    GoStrategy,
    NpmStrategy,
    PipStrategy,
)
from toolbin.core.services.tool_install.execution.path_registry import (  # noqa: F401
    PathRegistry,
    expand_path_dirs,
)
from toolbin.core.services.tool_install.execution.strategies import (  # noqa: F401
    InstallSpec,
    Strategy,
    StrategyRegistry,
    default_strategies,
)
from toolbin.core.services.tool_install.execution.subprocess_runner import (  # noqa: F401
    CommandResult,
    run_command,
)
