"""
Row transformer factories for the tables that need one.

Each factory returns a configured, stateless transformer ready to be
installed by an override rule.
"""

from .reset import ResetToDefaultTransformer
from .rewrite import HostRewriteTransformer


def create_severity_reset() -> ResetToDefaultTransformer:
    """
    Create the errata severity reset.

    Severity classification is tied to the source instance's workflow, so
    exported errata carry the column default instead.
    """
    return ResetToDefaultTransformer(column_name="severity_id")


def create_image_pillar_rewrite() -> HostRewriteTransformer:
    """
    Create the image pillar URL rewrite.

    Image pillars embed download URLs of the source server; they are
    rewritten to the ``{SERVER_FQDN}`` placeholder so any target can
    import them.
    """
    return HostRewriteTransformer(
        marker_column="category",
        marker_prefix="Image",
        payload_column="pillar",
        path_prefix="os-images",
    )
