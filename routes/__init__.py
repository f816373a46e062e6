from .guests import guests_bp

def register_blueprints(app):
    app.register_blueprint(guests_bp)
