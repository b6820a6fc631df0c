# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Shared configuration and logging for all services
# CREATED: 18 OCT 2026
# ============================================================================
