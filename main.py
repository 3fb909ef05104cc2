from storemanager import create_app

app = create_app()


# ---------------- RUN SERVER ----------------
if __name__ == "__main__":
    app.logger.info("Server started on port %s", app.config["PORT"])
    try:
        app.run(debug=True, port=app.config["PORT"])
    finally:
        app.extensions["store"].close()
