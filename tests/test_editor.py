"""
Tests for MindMapEditor: control panel actions, pointer flow, export/import.
"""

import json

from mindmap.constants import DEFAULT_TITLE, PASTEL_COLORS


class TestActions:

    def test_add_child_requires_selection(self, editor):
        assert editor.add_child() is None
        root_id = editor.store.roots[0].id
        editor.store.select(root_id)
        child_id = editor.add_child()
        assert editor.store.get_node(child_id).parent_id == root_id
        assert editor.selected_node_id == root_id

    def test_delete_selected(self, editor):
        node_id = editor.add_node()
        editor.store.select(node_id)
        editor.delete_selected()
        assert node_id not in editor.store
        assert editor.selected_node_id is None

    def test_pick_color(self, editor):
        root_id = editor.store.roots[0].id
        editor.store.select(root_id)
        editor.pick_color(PASTEL_COLORS[4])
        assert editor.store.get_node(root_id).color == PASTEL_COLORS[4]

    def test_toggle_connections(self, editor):
        assert editor.show_connections is True
        assert editor.toggle_connections() is False
        assert editor.toggle_connections() is True

    def test_clear_resets_title(self, editor):
        editor.set_title('Cells')
        editor.add_node()
        editor.clear()
        assert editor.title == DEFAULT_TITLE
        assert editor.node_count == 1

    def test_on_change_fires(self, editor):
        calls = []
        editor.set_on_change(lambda: calls.append(1))
        editor.add_node()
        editor.toggle_connections()
        assert len(calls) == 2


class TestPointerFlow:

    def test_down_move_up(self, editor):
        root = editor.store.roots[0]
        assert editor.pointer_down((410, 320)) == root.id
        assert editor.selected_node_id == root.id
        editor.pointer_move((510, 420))
        assert root.position == (500, 400)
        editor.pointer_up()
        editor.pointer_move((0, 0))
        assert root.position == (500, 400)

    def test_down_on_empty_canvas(self, editor):
        assert editor.pointer_down((5, 5)) is None
        assert not editor.drag.is_dragging

    def test_deleting_dragged_node_ends_drag(self, editor):
        root_id = editor.store.roots[0].id
        editor.pointer_down((410, 320))
        editor.store.delete_node(root_id)
        assert not editor.drag.is_dragging

    def test_deleting_edited_node_cancels_edit(self, editor):
        node_id = editor.add_node()
        editor.start_editing(node_id)
        editor.store.delete_node(node_id)
        assert not editor.edit.is_editing

    def test_edit_selected(self, editor, notifier):
        root_id = editor.store.roots[0].id
        editor.store.select(root_id)
        editor.start_editing()
        editor.edit.set_draft('Cells')
        editor.edit.handle_key('Enter')
        assert editor.store.get_node(root_id).text == 'Cells'
        assert ('success', 'Node updated!') in notifier.messages


class TestExportImport:

    def test_export(self, editor, notifier):
        editor.set_title('My Map')
        filename, text = editor.export()
        assert filename == 'My_Map.json'
        data = json.loads(text)
        assert data['title'] == 'My Map'
        assert len(data['nodes']) == 1
        assert notifier.messages[-1] == ('success', 'Mind map exported successfully!')

    def test_import_replaces_map(self, editor):
        root_id = editor.store.roots[0].id
        editor.store.add_node(root_id)
        editor.set_title('Saved')
        _, text = editor.export()

        editor.clear()
        assert editor.import_json(text) is True

        assert editor.title == 'Saved'
        assert editor.node_count == 2
        assert editor.connection_count == 1
        # sessions are bound to the new store
        assert editor.drag.store is editor.store
        assert editor.pointer_down((410, 320)) == root_id

    def test_import_own_export_of_empty_map(self, editor, notifier):
        editor.store.delete_node(editor.store.roots[0].id)
        _, text = editor.export()

        assert editor.import_json(text) is True
        assert editor.node_count == 0
        assert notifier.messages[-1] == ('success', 'Mind map imported successfully!')

    def test_import_failure_keeps_map(self, editor, notifier):
        node_id = editor.add_node()
        assert editor.import_json('{"nodes": "x"}') is False
        assert node_id in editor.store
        kind, message = notifier.messages[-1]
        assert kind == 'error'
        assert message.startswith('Import failed')
