"""Flask web application for fleet maintenance tracking."""

import logging
import os
from pathlib import Path

from flask import Flask, render_template, request, redirect, url_for, flash
from flask_login import (
    LoginManager,
    UserMixin,
    current_user,
    login_required,
    login_user,
    logout_user,
)
from werkzeug.security import check_password_hash, generate_password_hash

from fleetmaint.company import Company
from fleetmaint.csv_import import parse_csv_text
from fleetmaint.loader import (
    add_maintenance_record,
    add_truck,
    create_fleet,
    delete_truck,
    find_account,
    fleet_path,
    import_trucks,
    load_fleet,
    new_id,
    record_from_payload,
    truck_from_payload,
    update_company,
)
from fleetmaint.maintenance_type import MaintenanceType
from fleetmaint.status import Status
from fleetmaint.validation import (
    clean_payload,
    validate_company,
    validate_maintenance,
    validate_truck,
)

MIN_PASSWORD_LENGTH = 6

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to fleets directory (relative to project root)
app.config["DATA_DIR"] = Path(
    os.environ.get("FLEETMAINT_DATA_DIR", Path(__file__).parent.parent / "fleets")
)


def format_miles(miles):
    """Format miles with comma separator."""
    if miles is None:
        return "—"
    return f"{miles:,.0f}"


def format_timestamp(record):
    """Format a record's timestamp for display (e.g. 'Jan 5, 2025')."""
    performed = record.performed_at_datetime
    return f"{performed:%b} {performed.day}, {performed.year}"


def status_color(status: Status) -> str:
    """Get Tailwind color classes for status."""
    colors = {
        Status.DUE: "bg-red-100 text-red-800 border-red-200",
        Status.SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.GOOD: "bg-green-100 text-green-800 border-green-200",
        Status.UNKNOWN: "bg-gray-100 text-gray-500 border-gray-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


# Register template filters
app.jinja_env.filters["format_miles"] = format_miles
app.jinja_env.filters["format_timestamp"] = format_timestamp
app.jinja_env.filters["status_color"] = status_color


login_manager = LoginManager()
login_manager.init_app(app)
login_manager.login_view = "login"
login_manager.login_message_category = "error"


class FleetAccount(UserMixin):
    """Signed-in company, identified by its fleet file."""

    def __init__(self, company_id: str, path: Path):
        self.id = company_id
        self.path = path


@login_manager.user_loader
def load_account(company_id: str):
    path = fleet_path(app.config["DATA_DIR"], company_id)
    return FleetAccount(company_id, path) if path.exists() else None


# =============================================================================
# Account
# =============================================================================


@app.route("/register", methods=["GET", "POST"])
def register():
    """Sign up a new company."""
    if request.method == "GET":
        return render_template("register.html", values={}, errors=[])

    password = request.form.get("password") or ""
    values = clean_payload(request.form.to_dict())
    values.pop("password", None)
    errors = validate_company(values)
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if errors:
        return render_template("register.html", values=values, errors=errors), 400

    company = Company(
        id=new_id(),
        name=values["name"],
        address=values.get("address"),
        phone=values.get("phone"),
        email=values["email"],
    )
    try:
        path = create_fleet(
            app.config["DATA_DIR"], company, values["email"], generate_password_hash(password)
        )
    except ValueError as e:
        return render_template("register.html", values=values, errors=[str(e)]), 400

    login_user(FleetAccount(path.stem, path))
    flash(f"Welcome, {company.name}", "success")
    return redirect(url_for("index"))


@app.route("/login", methods=["GET", "POST"])
def login():
    """Sign in with email and password."""
    if current_user.is_authenticated:
        return redirect(url_for("index"))
    if request.method == "GET":
        return render_template("login.html", email="")

    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    account = find_account(app.config["DATA_DIR"], email) if email else None
    if account is None or not check_password_hash(account[1], password):
        app.logger.info("Failed sign-in for %s", email)
        flash("Invalid email or password", "error")
        return render_template("login.html", email=email), 401

    login_user(FleetAccount(account[0].stem, account[0]))
    return redirect(url_for("index"))


@app.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return redirect(url_for("login"))


# =============================================================================
# Dashboard and trucks
# =============================================================================


@app.route("/")
@login_required
def index():
    """Dashboard with fleet counts, recent and upcoming maintenance."""
    fleet = load_fleet(current_user.path)
    return render_template(
        "index.html",
        fleet=fleet,
        stats=fleet.dashboard_stats(),
        recent=fleet.recent_maintenance(),
        upcoming=fleet.upcoming_maintenance(),
    )


@app.route("/trucks")
@login_required
def truck_list():
    """Truck list with search and needs-maintenance badges."""
    fleet = load_fleet(current_user.path)
    search = request.args.get("q", "").strip()
    return render_template(
        "trucks.html",
        fleet=fleet,
        trucks=fleet.search_trucks(search),
        flags=fleet.maintenance_flags(),
        search=search,
    )


@app.route("/trucks/add", methods=["GET", "POST"])
@login_required
def add_truck_form():
    """Add a single truck."""
    if request.method == "GET":
        return render_template("add_truck.html", values={}, errors=[])

    values = clean_payload(
        request.form.to_dict(), numeric_fields=("year", "current_mileage")
    )
    errors = validate_truck(values)
    if errors:
        return render_template("add_truck.html", values=values, errors=errors), 400

    truck = truck_from_payload(values)
    try:
        add_truck(current_user.path, truck)
    except OSError:
        app.logger.exception("Error adding truck")
        flash("Failed to add truck. Please try again.", "error")
        return render_template("add_truck.html", values=values, errors=[]), 500

    flash(f"Added {truck.name}", "success")
    return redirect(url_for("truck_detail", truck_id=truck.id))


@app.route("/trucks/import", methods=["GET", "POST"])
@login_required
def import_trucks_form():
    """Validate an uploaded CSV and import its valid rows."""
    if request.method == "GET":
        return render_template("import.html", results=None, imported=None)

    upload = request.files.get("file")
    if upload is None or not upload.filename:
        flash("Please choose a CSV file", "error")
        return redirect(url_for("import_trucks_form"))

    try:
        text = upload.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        flash("File must be UTF-8 encoded CSV", "error")
        return redirect(url_for("import_trucks_form"))

    results = parse_csv_text(text)
    imported = None
    if request.form.get("confirm") == "true" and results.valid:
        trucks = [truck_from_payload(row.data) for row in results.valid]
        try:
            imported = import_trucks(current_user.path, trucks)
        except OSError:
            app.logger.exception("Error importing trucks")
            flash("Failed to import trucks. Please try again.", "error")

    return render_template("import.html", results=results, imported=imported)


@app.route("/trucks/<truck_id>")
@login_required
def truck_detail(truck_id: str):
    """Truck detail page with status cards and maintenance history."""
    fleet = load_fleet(current_user.path)
    truck = fleet.get_truck(truck_id)
    if truck is None:
        flash("Truck not found", "error")
        return redirect(url_for("truck_list"))

    return render_template(
        "truck.html",
        truck=truck,
        statuses=fleet.truck_status(truck),
        records=fleet.records_for_truck(truck.id),
    )


@app.route("/trucks/<truck_id>/delete", methods=["POST"])
@login_required
def delete_truck_view(truck_id: str):
    """Delete a truck and its maintenance history."""
    try:
        delete_truck(current_user.path, truck_id)
    except LookupError:
        flash("Truck not found", "error")
        return redirect(url_for("truck_list"))
    except OSError:
        app.logger.exception("Error deleting truck %s", truck_id)
        flash("Failed to delete truck. Please try again.", "error")
        return redirect(url_for("truck_detail", truck_id=truck_id))

    flash("Truck deleted", "success")
    return redirect(url_for("truck_list"))


@app.route("/trucks/<truck_id>/maintenance", methods=["GET", "POST"])
@login_required
def maintenance_form(truck_id: str):
    """Record maintenance for a truck."""
    fleet = load_fleet(current_user.path)
    truck = fleet.get_truck(truck_id)
    if truck is None:
        flash("Truck not found", "error")
        return redirect(url_for("truck_list"))

    types = [t.value for t in MaintenanceType]
    if request.method == "GET":
        values = {
            "maintenance_type": MaintenanceType.OIL_CHANGE.value,
            "mileage": truck.current_mileage,
        }
        return render_template(
            "maintenance_form.html", truck=truck, types=types, values=values, errors=[]
        )

    values = clean_payload(
        request.form.to_dict(), numeric_fields=("mileage", "next_due_mileage")
    )
    errors = validate_maintenance(values)
    if errors:
        return render_template(
            "maintenance_form.html", truck=truck, types=types, values=values, errors=errors
        ), 400

    record = record_from_payload(truck.id, values)
    try:
        add_maintenance_record(current_user.path, record)
    except (LookupError, OSError):
        app.logger.exception("Error adding maintenance record for truck %s", truck.id)
        flash("Failed to add maintenance record. Please try again.", "error")
        return redirect(url_for("maintenance_form", truck_id=truck.id))

    flash("Maintenance record added successfully.", "success")
    return redirect(url_for("truck_detail", truck_id=truck.id))


# =============================================================================
# Company profile
# =============================================================================


@app.route("/company", methods=["GET", "POST"])
@login_required
def company_profile():
    """View and edit the company profile."""
    fleet = load_fleet(current_user.path)
    company = fleet.company

    if request.method == "GET":
        values = {
            "name": company.name,
            "address": company.address,
            "phone": company.phone,
            "email": company.email or fleet.account_email,
            "website": company.website,
            "description": company.description,
        }
        return render_template("company.html", values=values, errors=[])

    values = clean_payload(request.form.to_dict())
    errors = validate_company(values)
    if errors:
        return render_template("company.html", values=values, errors=errors), 400

    updated = Company(
        id=company.id,
        name=values["name"],
        address=values.get("address"),
        phone=values.get("phone"),
        email=values.get("email"),
        website=values.get("website"),
        description=values.get("description"),
    )
    try:
        update_company(current_user.path, updated)
    except ValueError as e:
        return render_template("company.html", values=values, errors=[str(e)]), 400
    except OSError:
        app.logger.exception("Error updating company profile")
        flash("Failed to update company profile. Please try again.", "error")
        return render_template("company.html", values=values, errors=[]), 500

    flash("Company profile updated successfully.", "success")
    return redirect(url_for("company_profile"))


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("FLEETMAINT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
