from quillasm.labels import DataBlock, DataKind, Label, SymbolTable


def test_find_missing_returns_none():
    table = SymbolTable()
    assert table.find("LOOP") is None
    assert "LOOP" not in table
    assert len(table) == 0


def test_add_then_find():
    table = SymbolTable()
    label = Label("MAIN", line=100)
    table.add(label)
    assert table.find("MAIN") is label
    assert "MAIN" in table
    assert len(table) == 1


def test_lookup_is_case_sensitive():
    table = SymbolTable()
    table.add(Label("Main"))
    assert table.find("main") is None


def test_later_label_shadows_earlier():
    table = SymbolTable()
    first = Label("X", line=1)
    second = Label("X", line=2)
    table.add(first)
    table.add(second)
    assert table.find("X") is second
    assert len(table) == 1


def test_iteration_yields_every_label():
    table = SymbolTable()
    names = ["A", "B", "LOOP", "END"]
    for name in names:
        table.add(Label(name))
    assert sorted(label.name for label in table) == sorted(names)
    assert len(list(table)) == len(table)


def test_labels_are_mutable_for_relocation():
    table = SymbolTable()
    table.add(Label("STR", is_data=True, line=3))
    for label in table:
        if label.is_data:
            label.line += 100
    assert table.find("STR").line == 103


def test_label_defaults():
    label = Label("K")
    assert label.external is False
    assert label.is_data is False
    assert label.line == 0


def test_data_block_size():
    block = DataBlock(DataKind.DATA, (5, -3, 7))
    assert block.size == 3
    assert DataBlock(DataKind.STRING).size == 0