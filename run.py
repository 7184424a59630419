import os
import socket
import sys

from lotto_research import create_app
from lotto_research.config import config


def is_port_in_use(host: str, port: int) -> bool:
    """포트가 사용 중인지 확인"""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.settimeout(1)
            return s.connect_ex((host, port)) == 0
    except OSError:
        return False


def find_available_port(host: str, start_port: int, max_attempts: int = 10) -> int:
    """사용 가능한 포트 찾기"""
    for port in range(start_port, start_port + max_attempts):
        if not is_port_in_use(host, port):
            return port
    raise RuntimeError(f"No free port in {start_port}-{start_port + max_attempts - 1}")


def main() -> None:
    env = os.environ.get("FLASK_ENV", "development")
    config_class = config.get(env, config["default"])

    app = create_app(config_class)

    host = getattr(config_class, "HOST", "127.0.0.1")
    port = getattr(config_class, "PORT", 5000)
    debug = getattr(config_class, "DEBUG", True)

    print(f"Starting Flask app in {env} mode")
    print(f"Debug mode: {debug}")

    # reloader 재시작 시에는 포트 검사를 건너뛰기
    if os.environ.get("WERKZEUG_RUN_MAIN") == "true":
        port = int(os.environ.get("FLASK_PORT_OVERRIDE", port))
    elif is_port_in_use(host, port):
        print(f"포트 {port}이 이미 사용 중입니다. 다른 포트를 찾고 있습니다...")
        try:
            port = find_available_port(host, port + 1)
        except RuntimeError as e:
            print(f"오류: {e}")
            sys.exit(1)
        os.environ["FLASK_PORT_OVERRIDE"] = str(port)

    print(f"Server will be available at: http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
