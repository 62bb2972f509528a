from __future__ import annotations

from flask import Blueprint, current_app, flash, render_template
from flask.views import MethodView

from ..forms import CheckForm
from ..services import AssignmentStore
from .api import RESET_MESSAGE, RESET_REPEATED_MESSAGE


class LandingView(MethodView):
    """
    One input box: a participant's name reveals who they give to, the reset
    keyword draws again. Looking a name up never creates a draw.
    """
    init_every_request = False

    def __init__(self, store: AssignmentStore):
        self.store = store

    def _render(self, form: CheckForm, giver: str | None = None, recipient: str | None = None):
        return render_template(
            "landing.html",
            form=form,
            giver=giver,
            recipient=recipient,
            has_assignment=self.store.get() is not None,
            reset_keyword=current_app.config["SANTA_RESET_KEYWORD"],
        )

    def get(self):
        return self._render(CheckForm())

    def post(self):
        form = CheckForm()
        if not form.validate_on_submit():
            for errors in form.errors.values():
                for error in errors:
                    flash(error, "error")
            return self._render(form), 400

        value = form.value.data.lower()
        keyword = current_app.config["SANTA_RESET_KEYWORD"]

        if value == keyword:
            result = self.store.reset()
            flash(RESET_REPEATED_MESSAGE if result.repeated else RESET_MESSAGE, "success")
            form.value.data = ""
            return self._render(form)

        if value in self.store.participants:
            current = self.store.get()
            if current is None:
                flash(f"No saved draw. Type '{keyword}' and press Check to create one.", "error")
                return self._render(form)
            return self._render(form, giver=value, recipient=current[value])

        flash("Input is valid.", "success")
        return self._render(form)


def create_public_blueprint(store: AssignmentStore) -> Blueprint:
    bp = Blueprint("public", __name__)
    bp.add_url_rule("/", view_func=LandingView.as_view("landing", store), methods=["GET", "POST"])
    return bp
