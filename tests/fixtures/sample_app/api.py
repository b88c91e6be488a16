from flask import Flask
from flask_login import login_required

app = Flask(__name__)


@app.route("/api/reports")
def reports():
    return []


@app.get("/admin/users")
@login_required
def admin_users():
    return []
