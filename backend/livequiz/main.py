import os

from flask import Blueprint, abort, current_app, send_from_directory

main = Blueprint('main', __name__)

# Short paths for the three client pages
PAGE_ALIASES = ('admin', 'player', 'projector')


def _send_public(filename):
    public_dir = current_app.config.get('PUBLIC_DIR')
    if not public_dir or not os.path.isdir(public_dir):
        abort(404)
    return send_from_directory(public_dir, filename)


@main.route('/')
def index():
    return _send_public('index.html')


@main.route('/<string:page>')
def client_page(page):
    if page in PAGE_ALIASES:
        return _send_public(f'{page}.html')
    return _send_public(page)


@main.route('/<path:filename>')
def public_file(filename):
    return _send_public(filename)
