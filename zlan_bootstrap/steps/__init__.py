from .step_20_private_feed import ConfigurePrivateFeedStep
from .step_30_public_feed import ConfigurePublicFeedStep
from .step_40_refresh_index import RefreshIndexStep
from .step_50_install_package import InstallPackageStep

__all__ = [
    "ConfigurePrivateFeedStep",
    "ConfigurePublicFeedStep",
    "RefreshIndexStep",
    "InstallPackageStep",
]
