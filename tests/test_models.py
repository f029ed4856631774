# tests/test_models.py
"""Tests for data models."""

import pytest
from pydantic import ValidationError

from querychart.models.chart import (
    ChartData,
    ChartDataset,
    ChartPlan,
    DataMapping,
)
from querychart.models.query import ActionResult, ErrorDetails, QueryRunResult
from querychart.models.schema import (
    ColumnDefinition,
    ForeignKey,
    ForeignKeyReference,
    Relationship,
    RelationshipType,
    SchemaDescription,
    TableDefinition,
)
from querychart.utils.exceptions import (
    ChartGenerationError,
    DatabaseQueryError,
    SQLValidationError,
)


class TestSchemaModels:
    """Schema model tests."""

    def test_primary_key_in_column_order(self):
        """Test primary key columns follow column order."""
        table = TableDefinition(
            name="playlist_track",
            columns=[
                ColumnDefinition(name="playlist_id", type="INTEGER", primary_key=True),
                ColumnDefinition(name="track_id", type="INTEGER", primary_key=True),
                ColumnDefinition(name="added_at", type="TIMESTAMP"),
            ],
        )
        assert table.primary_key == ["playlist_id", "track_id"]

    def test_duplicate_columns_rejected(self):
        """Test column names must be unique within a table."""
        with pytest.raises(ValidationError):
            TableDefinition(
                name="t",
                columns=[
                    ColumnDefinition(name="id", type="INTEGER"),
                    ColumnDefinition(name="id", type="TEXT"),
                ],
            )

    def test_foreign_key_arity(self):
        """Test both sides of a foreign key must have the same length."""
        with pytest.raises(ValidationError):
            ForeignKey(
                columns=["order_id", "line_no"],
                references=ForeignKeyReference(table="order_lines", columns=["order_id"]),
            )

    def test_relationship_alias(self):
        """Test 'from' is accepted and emitted under its alias."""
        relationship = Relationship.model_validate({
            "type": "many-to-many",
            "from": "tracks.track_id",
            "to": "playlist_track.track_id",
            "through": "invoice_lines",
        })
        assert relationship.from_ == "tracks.track_id"
        assert relationship.type == RelationshipType.MANY_TO_MANY
        dumped = relationship.model_dump(by_alias=True, mode="json")
        assert dumped["from"] == "tracks.track_id"
        assert dumped["type"] == "many-to-many"

    def test_get_table(self):
        """Test table lookup by name."""
        description = SchemaDescription(
            tables=[TableDefinition(name="artists", columns=[])]
        )
        assert description.get_table("artists").name == "artists"
        assert description.get_table("albums") is None

    def test_descriptions_are_immutable(self):
        """Test that descriptions cannot be mutated after building."""
        description = SchemaDescription()
        with pytest.raises(ValidationError):
            description.tables = []


class TestChartModels:
    """Chart model tests."""

    def test_dataset_length_must_match_labels(self):
        """Test datasets and labels stay aligned."""
        with pytest.raises(ValidationError):
            ChartData(
                labels=["a", "b"],
                datasets=[ChartDataset(label="x", data=[1.0])],
            )

    def test_dataset_allows_gaps(self):
        """Test null values are kept as gaps."""
        data = ChartData(labels=["a", "b"], datasets=[ChartDataset(label="x", data=[1, None])])
        assert data.datasets[0].data == [1.0, None]

    def test_mapping_requires_dataset(self):
        """Test a data mapping needs at least one dataset."""
        with pytest.raises(ValidationError):
            DataMapping(label_field="name", datasets=[])

    def test_plan_rejects_unknown_chart_type(self):
        """Test only supported chart types are accepted."""
        with pytest.raises(ValidationError):
            ChartPlan.model_validate({
                "type": "pie",
                "dataMapping": {
                    "labelField": "name",
                    "datasets": [{"name": "n", "valueField": "v"}],
                },
            })

    def test_plan_accepts_snake_case(self):
        """Test plans can be built with field names too."""
        plan = ChartPlan(
            type="line",
            data_mapping=DataMapping(
                label_field="month",
                datasets=[{"name": "Revenue", "value_field": "revenue"}],
            ),
        )
        assert plan.options.animation.duration == 1000
        assert plan.data_mapping.datasets[0].value_field == "revenue"


class TestActionResult:
    """Result envelope tests."""

    def test_ok(self):
        """Test the success envelope."""
        result = ActionResult[str].ok("SELECT 1")
        assert result.success is True
        assert result.data == "SELECT 1"
        assert result.error is None

    def test_fail(self):
        """Test the error envelope."""
        result = ActionResult[QueryRunResult].fail("Invalid query: nope", "VALIDATION_ERROR")
        assert result.success is False
        assert result.data is None
        assert result.error == ErrorDetails(message="Invalid query: nope", code="VALIDATION_ERROR")


class TestExceptions:
    """Exception payload tests."""

    def test_validation_error_to_dict(self):
        """Test the error dict of a validation failure."""
        error = SQLValidationError("DROP TABLE t", "Only SELECT queries are allowed")
        assert error.to_dict() == {
            "message": "Invalid query: Only SELECT queries are allowed",
            "code": "VALIDATION_ERROR",
            "details": {"sql": "DROP TABLE t", "reason": "Only SELECT queries are allowed"},
        }

    def test_default_messages(self):
        """Test the default message for each code."""
        assert DatabaseQueryError("SELECT 1").message == "Database query failed"
        assert str(ChartGenerationError("q")) == "Failed to generate chart configuration"
