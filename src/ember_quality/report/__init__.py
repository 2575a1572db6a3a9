from ember_quality.report.renderer import generate_validation_report, save_report

__all__ = ["generate_validation_report", "save_report"]
