from livequiz import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # SocketIO server serves both the pages and the websocket endpoint
    socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], allow_unsafe_werkzeug=True)
