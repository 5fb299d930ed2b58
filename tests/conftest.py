"""
Pytest configuration and fixtures for override layer tests.
Provides introspected-table and row fixtures shaped like the live schema.
"""

import pytest

from schema import Reference, RowColumn, Table, UniqueIndex


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "property: mark test as property-based test")


@pytest.fixture(autouse=True)
def no_trace_export(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep spans local during tests."""
    monkeypatch.delenv("OTLP_ENDPOINT", raising=False)
    monkeypatch.delenv("TRACE_CONSOLE", raising=False)


def make_table(name: str, columns=(), indexes=None, references=None, **kwargs) -> Table:
    """Build a table the way introspection would hand it over."""
    return Table(
        name=name,
        columns=list(columns),
        unique_indexes={
            index_name: UniqueIndex(index_name, tuple(index_columns))
            for index_name, index_columns in (indexes or {}).items()
        },
        references=list(references or []),
        **kwargs,
    )


@pytest.fixture
def table_factory():
    return make_table


@pytest.fixture
def errata_table() -> Table:
    return make_table(
        "rhnerrata",
        columns=["id", "advisory", "advisory_name", "org_id", "severity_id", "synopsis"],
        indexes={
            "rhn_errata_id_pk": ["id"],
            "rhn_errata_adv_org_uq": ["advisory", "org_id"],
            "rhn_errata_advname_org_uq": ["advisory_name", "org_id"],
        },
        pk_sequence="rhn_errata_id_seq",
        main_unique_index_name="rhn_errata_advname_org_uq",
    )


@pytest.fixture
def image_profile_table() -> Table:
    return make_table(
        "suseimageprofile",
        columns=["profile_id", "label", "org_id", "token_id", "target_store_id"],
        indexes={"suse_imgprof_label_uq": ["label", "org_id"]},
        references=[
            Reference("web_customer", {"org_id": "id"}),
            Reference("rhnregtoken", {"token_id": "id"}),
            Reference("suseimagestore", {"target_store_id": "id"}),
        ],
    )


@pytest.fixture
def package_evr_table() -> Table:
    return make_table(
        "rhnpackageevr",
        columns=["id", "epoch", "version", "release", "type", "evr"],
        indexes={
            "rhn_pe_v_r_e_uq": ["version", "release", "epoch"],
            "rhn_pe_v_r_uq": ["version", "release"],
        },
    )


@pytest.fixture
def image_pillar_row() -> list[RowColumn]:
    return [
        RowColumn("id", "numeric", 7, None),
        RowColumn("category", "character varying", "Image-OpenSUSE-1.0", None),
        RowColumn(
            "pillar",
            "bytea",
            b'{"boot_image": {"kernel": {"url": "https://old-host.example/os-images/1/foo.raw"}}}',
            None,
        ),
        RowColumn("org_id", "numeric", 1, None),
    ]

