import pytest

from layout_compiler import CollectingReporter, RecordingEmitter, View, ViewIndex


@pytest.fixture
def reporter():
    return CollectingReporter()


@pytest.fixture
def emitter():
    return RecordingEmitter()


@pytest.fixture
def hierarchy():
    """root > container > (label, button)"""
    root = View("root")
    container = View("container", parent=root)
    label = View("label", parent=container)
    button = View("button", parent=container)
    return {"root": root, "container": container, "label": label, "button": button}


@pytest.fixture
def view_index(hierarchy):
    index = ViewIndex(hierarchy["root"])
    for name, view in hierarchy.items():
        index.register(name, view)
    return index
