"""
Keystream Configuration

Default parameters for keystream generation, with environment overrides.
"""

import os
from typing import Any, Dict, Mapping, Optional

# Default parameters for keystream generation
KEYSTREAM_DEFAULT_PARAMS = {
    'batch_blocks': 1024,          # 64-byte blocks generated per numpy batch
    'default_variant': 'chacha20'  # Variant used when none is given
}

BATCH_BLOCKS_ENV = 'ARXSTREAM_BATCH_BLOCKS'
VARIANT_ENV = 'ARXSTREAM_VARIANT'


def load_params(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Return the effective keystream parameters.

    Args:
        environ: Mapping to read overrides from (default: os.environ)

    Returns:
        A new dictionary with the defaults and any overrides applied

    Raises:
        ValueError: If an override is malformed
    """
    if environ is None:
        environ = os.environ

    params = dict(KEYSTREAM_DEFAULT_PARAMS)

    raw_batch = environ.get(BATCH_BLOCKS_ENV)
    if raw_batch:
        try:
            batch_blocks = int(raw_batch)
        except ValueError:
            raise ValueError(f"{BATCH_BLOCKS_ENV} must be an integer, got {raw_batch!r}")
        if batch_blocks <= 0:
            raise ValueError(f"{BATCH_BLOCKS_ENV} must be positive, got {batch_blocks}")
        params['batch_blocks'] = batch_blocks

    raw_variant = environ.get(VARIANT_ENV)
    if raw_variant:
        params['default_variant'] = raw_variant.strip()

    return params
