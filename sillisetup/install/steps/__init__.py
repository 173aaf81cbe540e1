"""安装步骤"""

from .install_step import InstallStep
from .resolve_config_step import ResolveConfigStep
from .download_step import DownloadStep
from .install_artifacts_step import InstallArtifactsStep
from .cleanup_staging_step import CleanupStagingStep

__all__ = [
    "InstallStep",
    "ResolveConfigStep",
    "DownloadStep",
    "InstallArtifactsStep",
    "CleanupStagingStep",
]
