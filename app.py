"""
Main NiceGUI application for the mind map editor.

Renders the MindMapEditor state on a ui.interactive_image canvas (SVG overlay)
and binds the control panel, pointer events and inline text editing to it.
Each browser tab gets its own editor.
"""

import logging
import sys

from dotenv import load_dotenv
from nicegui import ui

load_dotenv()

from mindmap.config import get_canvas_size, get_log_level, get_port, get_title
from mindmap.constants import PASTEL_COLORS
from mindmap.edit.handlers import CANVAS_EVENTS, setup_edit_handlers
from mindmap.editor import MindMapEditor
from mindmap.notifications import NiceGUINotifier
from mindmap.svg_view import build_svg_content

logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


@ui.page('/')
def main_page():
    canvas_width, canvas_height = get_canvas_size()
    editor = MindMapEditor(
        notifier=NiceGUINotifier(),
        title=get_title(),
        canvas_size=(canvas_width, canvas_height),
    )
    handlers = setup_edit_handlers(editor)

    def do_export():
        filename, payload = editor.export()
        ui.download(payload.encode('utf-8'), filename, 'application/json')

    def do_import(e):
        try:
            text = e.content.read().decode('utf-8')
        except UnicodeDecodeError:
            editor.notifier.notify('error', 'Import failed: file is not UTF-8 text')
            return
        editor.import_json(text)
        title_input.value = editor.title
        upload.reset()

    def do_clear():
        editor.clear()
        title_input.value = editor.title

    @ui.refreshable
    def render_controls():
        selected = editor.selected_node_id
        ui.button('Add Node', icon='add', on_click=editor.add_node).classes('w-full')
        if selected:
            ui.button('Add Child', icon='add', on_click=editor.add_child).props('outline').classes('w-full')

        ui.separator()

        if selected:
            ui.label('Selected Node').classes('text-sm font-medium')
            with ui.row().classes('w-full gap-2'):
                ui.button(icon='edit', on_click=lambda: editor.start_editing()).props('outline').classes('flex-1')
                ui.button(icon='delete', on_click=editor.delete_selected).props('outline color=negative').classes('flex-1')
            with ui.grid(columns=4).classes('gap-2 mt-2'):
                for color in PASTEL_COLORS:
                    ui.button(on_click=lambda c=color: editor.pick_color(c)) \
                        .props('round dense unelevated') \
                        .style(f'background-color: {color} !important; width: 32px; height: 32px')
            ui.separator()

        ui.label('View').classes('text-sm font-medium')
        ui.button(
            'Hide Connections' if editor.show_connections else 'Show Connections',
            icon='visibility' if editor.show_connections else 'visibility_off',
            on_click=editor.toggle_connections,
        ).props('outline').classes('w-full')

        ui.separator()
        ui.badge(f'{editor.node_count} Nodes', color='grey').classes('w-full justify-center')
        ui.badge(f'{editor.connection_count} Connections', color='grey').classes('w-full justify-center')

    panel_state = {'signature': None}

    def refresh():
        canvas.set_content(build_svg_content(editor))
        state = editor.edit.state
        edit_row.set_visibility(state is not None)
        if state is not None and edit_input.value != state.draft_text:
            edit_input.value = state.draft_text
        # Drag steps only move nodes; rebuild the panel when what it shows changes
        signature = (editor.selected_node_id, editor.node_count, editor.connection_count, editor.show_connections)
        if signature != panel_state['signature']:
            panel_state['signature'] = signature
            render_controls.refresh()

    with ui.header().classes('items-center justify-between'):
        ui.label('Mindmap Generator').classes('text-xl')
        title_input = ui.input(
            placeholder='Mind map title...',
            value=editor.title,
            on_change=lambda e: editor.set_title(e.value or ''),
        ).props('dense outlined bg-color=white').classes('w-48')

    with ui.row().classes('w-full no-wrap gap-6 p-4'):
        with ui.card().classes('w-64'):
            ui.label('Controls').classes('text-lg font-bold')
            with ui.column().classes('w-full gap-2'):
                render_controls()
            ui.separator()
            ui.button('Export', icon='download', on_click=do_export).props('outline').classes('w-full')
            upload = ui.upload(label='Import', auto_upload=True, on_upload=do_import) \
                .props('accept=.json flat bordered').classes('w-full')
            ui.button('Clear All', icon='refresh', on_click=do_clear).props('outline color=negative').classes('w-full')

        with ui.card().classes('p-0'):
            with ui.row().classes('w-full items-center gap-2 p-2') as edit_row:
                ui.label('Editing:').classes('text-sm')
                edit_input = ui.input(on_change=handlers['handle_draft_change']).props('dense autofocus').classes('flex-1')
                edit_input.on('keydown', handlers['handle_key'])
                edit_input.on('blur', handlers['handle_blur'])
            edit_row.set_visibility(False)

            canvas = ui.interactive_image(
                size=(canvas_width, canvas_height),
                on_mouse=handlers['handle_mouse'],
                events=CANVAS_EVENTS,
                cross=False,
            ).classes('bg-white')

    editor.set_on_change(refresh)
    refresh()
    logger.info(f"Editor page opened ({canvas_width}x{canvas_height})")


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Mind Map',
        port=get_port(),
        reload=not getattr(sys, 'frozen', False),
    )
