"""Version information for translation-health."""

__version__ = "0.4.0"
__author__ = "Sezgin Paksoy"
__description__ = "Runtime translation health tracking: issue detection, scoring and export"

# Changelog:
# 0.4.0 - Command line interface
#       - New 'report', 'issues', 'validate', 'scan' and 'triage' commands
#       - Markdown report export
#       - Feature gate with TRANSLATION_HEALTH_ENABLED environment override
#
# 0.3.0 - Export / import
#       - Portable JSON document (issues + detection config + exportedAt)
#       - All-or-nothing import with human readable rejection reasons
#       - Fingerprint check on imported issues
#
# 0.2.0 - Detection controller
#       - Global on/off switch and per-kind toggles
#       - RTL violation detector
#       - Hardcoded string heuristic is now a swappable strategy
#
# 0.1.0 - Initial release
#       - Missing translation and fallback usage detectors
#       - Issue store with fingerprint de-duplication
#       - Per-locale and overall health score
