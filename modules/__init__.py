"""
Image Animation Studio - Modular Components

This package contains the core modules for the Image Animation Studio:
- config: Configuration, constants, and data models
- utils: Helper functions (image loading, logging)
- errors: Video generation error taxonomy and classification rules
- gemini_client: Gemini API client initialization and Veo request config
- progress: Background progress ticker
- video_generator: Veo job orchestration (submit, poll, download)
- batch: Sequential batch driver with incremental result snapshots
"""

# Lazy imports to avoid circular dependencies and hot-reload issues
__all__ = [
    # Config
    "ImageFile",
    "GenerationRequest",
    "ASPECT_RATIOS",
    "DEFAULT_ASPECT_RATIO",
    "LOADING_MESSAGES",
    "PROMPT_PLACEHOLDER",
    # Utils
    "load_image_bytes",
    "image_file_from_upload",
    "get_logger",
    # Errors
    "VideoGenerationError",
    "classify_operation_error",
    # Gemini Client
    "get_api_key",
    "get_genai_client",
    "get_video_model_name",
    # Orchestration
    "ProgressTicker",
    "generate_video_from_image",
    # Batch
    "BatchResult",
    "iter_batch_results",
    "run_batch",
    "validate_batch_inputs",
    "video_file_name",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies and streamlit hot-reload issues."""
    if name in __all__:
        # Import on-demand to avoid module initialization issues
        if name in ("ImageFile", "GenerationRequest", "ASPECT_RATIOS", "DEFAULT_ASPECT_RATIO", "LOADING_MESSAGES", "PROMPT_PLACEHOLDER"):
            from . import config
            return getattr(config, name)
        elif name in ("load_image_bytes", "image_file_from_upload", "get_logger"):
            from . import utils
            return getattr(utils, name)
        elif name in ("VideoGenerationError", "classify_operation_error"):
            from . import errors
            return getattr(errors, name)
        elif name in ("get_api_key", "get_genai_client", "get_video_model_name"):
            from . import gemini_client
            return getattr(gemini_client, name)
        elif name == "ProgressTicker":
            from .progress import ProgressTicker
            return ProgressTicker
        elif name == "generate_video_from_image":
            from .video_generator import generate_video_from_image
            return generate_video_from_image
        elif name in ("BatchResult", "iter_batch_results", "run_batch", "validate_batch_inputs", "video_file_name"):
            from . import batch
            return getattr(batch, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
