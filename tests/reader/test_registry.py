import pytest

from bipartite_sage import ConfigurationError, InstanceReaderConfig, UnsupBipartiteInstReader
from bipartite_sage.reader import PredictBatchBuilder, TrainBatchBuilder, build_reader_table, new_instance_reader


def test_table_exposes_both_names():
    table = build_reader_table()
    assert table["UnsupBipartiteInstReader"] is UnsupBipartiteInstReader
    assert table["unsup_bipartite_graphsage"] is UnsupBipartiteInstReader


def test_table_is_fresh_per_call():
    table = build_reader_table()
    table["custom"] = object
    assert "custom" not in build_reader_table()


def test_new_reader_from_config_string(graph_client):
    reader = new_instance_reader("unsup_bipartite_graphsage", "is_train=0;num_neighbors=2", graph_client)
    assert isinstance(reader.builder, PredictBatchBuilder)
    assert reader.config.num_neighbors == [2]


def test_new_reader_from_pairs_and_model(graph_client):
    reader = new_instance_reader("UnsupBipartiteInstReader", [("num_neg", "2")], graph_client)
    assert isinstance(reader.builder, TrainBatchBuilder)

    config = InstanceReaderConfig(num_neg=4)
    assert new_instance_reader("UnsupBipartiteInstReader", config, graph_client).config is config


def test_unknown_reader_name(graph_client):
    with pytest.raises(ConfigurationError, match="Unknown instance reader"):
        new_instance_reader("supervised_graphsage", {}, graph_client)


def test_explicit_table_is_used(graph_client):
    created = []

    def factory(config, client, **kwargs):
        created.append((config, client, kwargs))
        return "reader"

    result = new_instance_reader("mine", {}, graph_client, table={"mine": factory})

    assert result == "reader"
    assert created[0][1] is graph_client
    assert set(created[0][2]) == {"flow", "telemetry"}
