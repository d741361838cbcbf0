from receipt_points.api.main import run

run()
