from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileRequired

from legacy_claims.utils import ALLOWED_EXTENSIONS


class LegacyImportForm(FlaskForm):
    # token-authenticated JSON API, no browser session to protect
    class Meta:
        csrf = False

    file = FileField('Archivo', validators=[
        FileRequired('No se proporcionó archivo'),
        FileAllowed(sorted(ALLOWED_EXTENSIONS), 'Solo se aceptan archivos .csv, .tsv o .txt'),
    ])
