"""
Inclusion rules for File Discovery.

Only the extension is matched, exactly and case-sensitively, against the part after
the last dot of the entry name. Entries without an extension never match.
"""

# Generated JavaScript bundles. `.map` files sitting next to them are not candidates.
SUPPORTED_EXTENSIONS = {"js"}
