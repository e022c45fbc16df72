from bipartite_sage import Instance


def test_get_or_insert_creates_once():
    inst = Instance()
    first = inst.get_or_insert("ids", list)
    first.append(3)

    assert inst.get_or_insert("ids", list) is first
    assert inst["ids"] == [3]
    assert "ids" in inst
    assert list(inst) == ["ids"] and len(inst) == 1


def test_clear_batch_resets_everything():
    inst = Instance()
    assert inst.empty
    inst.set("x", 1)
    inst.batch = 8
    assert not inst.empty
    assert inst.get("missing", 0) == 0

    inst.clear_batch()

    assert inst.empty
    assert "x" not in inst
    assert "batch=0" in repr(inst)
