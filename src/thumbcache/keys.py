"""Cache key derivation.

The key is the concatenation of tagged fields in a fixed order:

    b=<bucket>k=<key>[w=<width>][h=<height>][c=<crop>]

Options that are absent contribute nothing, so an empty ThumbnailOptions and
one with every field set to None produce the same key. The coordinator and
the generator both derive keys here; they must never diverge.

Example:
    >>> derive_cache_key(SourceRef("imgs", "a.png"), ThumbnailOptions(width=100, crop="Center"))
    'b=imgsk=a.pngw=100c=Center'
"""

from thumbcache.models import SourceRef, ThumbnailOptions

# Short tag per option, in key order.
OPTION_TAGS: dict[str, str] = {
    "width": "w",
    "height": "h",
    "crop": "c",
}


def derive_cache_key(source: SourceRef, options: ThumbnailOptions | None = None) -> str:
    """Derive the deterministic cache key for a source and its rendering options.

    Args:
        source: Source image reference
        options: Rendering options (None is the same as no options)

    Returns:
        Cache key string
    """
    key = f"b={source.bucket}k={source.key}"
    if options is None:
        return key
    for name, value in options.present():
        key += f"{OPTION_TAGS[name]}={value}"
    return key
