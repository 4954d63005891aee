from .results import ErrorKind, LegacyErr, ClaimOk, BoxHint, VerifyNameOk
from .legacy_import import ImportResult, import_legacy_file, import_legacy_text, saved_upload
from .legacy_claim import claim_legacy_account, verify_box_exists, verify_name
from .legacy_admin import list_legacy_clients, legacy_stats, delete_legacy_client
