"""
Registry of table overrides.

Maps exact table names to the corrections generic introspection cannot
derive on its own. Every entry is a discrete, hand-maintained rule; lookup
is by exact name only.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from schema.model import Table
from transformation.transformers import create_image_pillar_rewrite, create_severity_reset

from .rules import ReferenceRewrite, TableOverride


class OverrideRegistry:
    """
    Read-only mapping of table name -> TableOverride.

    Usage:
        registry = OverrideRegistry({"rhnchecksum": TableOverride(pk_sequence="rhnchecksum_seq")})
        table = registry.apply(table)
    """

    def __init__(self, rules: Mapping[str, TableOverride]):
        """
        Initialize registry.

        Args:
            rules: Table name -> rule. Names must be lowercase.

        Raises:
            ValueError: If a table name is not lowercase
        """
        for name in rules:
            if name != name.lower():
                raise ValueError(f"Table name must be lowercase: {name}")
        self._rules = MappingProxyType(dict(rules))

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.table_names())

    def get(self, table_name: str) -> TableOverride | None:
        return self._rules.get(table_name)

    def table_names(self) -> list[str]:
        """Get sorted names of overridden tables."""
        return sorted(self._rules)

    def apply(self, table: Table) -> Table:
        """
        Apply the table's rule, if any.

        Tables without a rule are returned unchanged (same object).
        """
        rule = self._rules.get(table.name)
        if rule is None:
            return table
        return rule.apply(table)

    def describe(self) -> dict[str, dict]:
        """Auditable listing of every rule, sorted by table name."""
        return {name: self._rules[name].describe() for name in self.table_names()}


DEFAULT_REGISTRY = OverrideRegistry({
    "rhnchecksumtype": TableOverride(pk_sequence="rhn_checksum_id_seq"),
    "rhnchecksum": TableOverride(pk_sequence="rhnchecksum_seq"),
    "rhnpackagearch": TableOverride(pk_sequence="rhn_package_arch_id_seq"),
    "rhnchannelarch": TableOverride(pk_sequence="rhn_channel_arch_id_seq"),
    # constraint: rhn_pn_id_pk
    "rhnpackagename": TableOverride(pk_sequence="RHN_PKG_NAME_SEQ"),
    "rhnpackagenevra": TableOverride(pk_sequence="rhn_pkgnevra_id_seq"),
    "rhnpackagesource": TableOverride(pk_sequence="rhn_package_source_id_seq"),
    "rhnpackagekey": TableOverride(pk_sequence="rhn_pkey_id_seq"),
    "rhnpackageextratag": TableOverride(
        virtual_index_columns=("package_id", "key_id"),
        reason="Only unique key is the surrogate id",
    ),
    # constraint: rhn_pe_id_pk
    "rhnpackageevr": TableOverride(
        pk_sequence="rhn_pkg_evr_seq",
        unexport_columns=frozenset({"type"}),
        extend_indexes={
            "rhn_pe_v_r_e_uq": ("type",),
            "rhn_pe_v_r_uq": ("type",),
        },
        reason="EVR uniqueness depends on the type column",
    ),
    "rhnpackage": TableOverride(
        pk_sequence="RHN_PACKAGE_ID_SEQ",
        virtual_index_columns=("name_id", "evr_id", "package_arch_id", "checksum_id", "org_id"),
        reason="Only unique key is the surrogate id",
    ),
    "rhnpackagechangelogdata": TableOverride(
        pk_sequence="rhn_pkg_cld_id_seq",
        virtual_index_columns=("name", "text", "time"),
        reason="Only unique key is the surrogate id",
    ),
    "rhnpackagechangelogrec": TableOverride(pk_sequence="rhn_pkg_cl_id_seq"),
    # pkid: rhn_pkg_capability_id_pk
    "rhnpackagecapability": TableOverride(
        pk_sequence="RHN_PKG_CAPABILITY_ID_SEQ",
        virtual_index_columns=("name", "version"),
        reason="Real unique indexes are too complex to match on",
    ),
    "rhnconfigfiletype": TableOverride(virtual_index_columns=("label",)),
    "rhnconfigfile": TableOverride(
        unexport_columns=frozenset({"latest_config_revision_id"}),
        reason="Latest revision is linked after revisions are imported",
    ),
    "rhnconfigcontent": TableOverride(
        virtual_index_columns=(
            "contents", "file_size", "checksum_id", "is_binary",
            "delim_start", "delim_end", "created",
        ),
    ),
    "suseimageinfo": TableOverride(
        # Actions, build host and log are relevant only to the source server
        unexport_columns=frozenset({
            "build_action_id", "inspect_action_id", "build_server_id", "log",
        }),
        virtual_index_columns=(
            "name", "version", "image_type", "image_arch_id", "org_id", "curr_revision_num",
        ),
        reason="Images are unique only by id; match on the closest compound key",
    ),
    "suseimageinfochannel": TableOverride(virtual_index_columns=("channel_id", "image_info_id")),
    "suseimageprofile": TableOverride(
        pk_sequence="suse_imgprof_prid_seq",
        reference_rewrite=ReferenceRewrite(
            from_table="rhnregtoken",
            to_table="rhnactivationkey",
            column_mapping=MappingProxyType({"token_id": "reg_token_id"}),
        ),
        reason="Registration tokens are not unique standalone; activation keys reference the same id",
    ),
    "susekiwiprofile": TableOverride(virtual_index_columns=("profile_id",)),
    "susedockerfileprofile": TableOverride(virtual_index_columns=("profile_id", "path")),
    "rhnerrata": TableOverride(
        main_unique_index_name="rhn_errata_adv_org_uq",
        row_transformer=create_severity_reset(),
        reason="Two unique indexes of the same size; pin one so matching is deterministic",
    ),
    "susesaltpillar": TableOverride(
        virtual_index_columns=("server_id", "group_id", "org_id", "category"),
        row_transformer=create_image_pillar_rewrite(),
        reason="Image pillars embed source server URLs",
    ),
    "suseimagefile": TableOverride(
        pk_sequence="suse_image_file_id_seq",
        virtual_index_columns=("image_info_id", "file"),
    ),
})
