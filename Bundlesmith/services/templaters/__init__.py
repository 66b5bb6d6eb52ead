"""Target-specific manifest and bootstrap file templaters."""

from .service import (
    Cocos2dTemplater,
    CordovaTemplater,
    ElectronTemplater,
    FacebookInstantGamesTemplater,
    IndexFileTemplater,
    PreviewTemplater,
    TargetFileTemplater,
    WebTemplater,
    get_templater,
)

__all__ = [
    "Cocos2dTemplater",
    "CordovaTemplater",
    "ElectronTemplater",
    "FacebookInstantGamesTemplater",
    "IndexFileTemplater",
    "PreviewTemplater",
    "TargetFileTemplater",
    "WebTemplater",
    "get_templater",
]
