VERSION = "2.0.0"

# Persisted document
STORAGE_KEY = "sprachapp_pro_v2"
BACKUP_SCHEMA = "sprachapp/v2"
BACKUP_PREFIX = "sprachapp_backup_"
