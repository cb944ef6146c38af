from upload_gateway.main import run

run()
