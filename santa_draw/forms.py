from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import DataRequired, Length, Regexp

# Latin letters plus the Turkish ones, digits, whitespace and light punctuation
NAME_PATTERN = r"^[A-Za-z0-9ığüşöçİĞÜŞÖÇ\s.,!?-]+$"


class CheckForm(FlaskForm):
    value = StringField(
        "Name",
        filters=[lambda v: v.strip() if v else v],
        validators=[
            DataRequired(message="Input cannot be empty."),
            Length(min=3, message="Enter at least 3 characters."),
            Regexp(NAME_PATTERN, message="Input contains invalid characters."),
        ],
    )
    submit = SubmitField("Check")
