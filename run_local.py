#!/usr/bin/env python3
"""
로컬 개발 환경에서 실행하기 위한 스크립트
로컬 접속만 허용하고 5000 포트를 사용합니다.
"""

import os

os.environ['FLASK_ENV'] = 'development'

from run import main


def local_main() -> None:
    """로컬 개발 환경 전용 메인 함수"""
    print("로컬 개발 환경에서 Lotto Research API를 시작합니다...")
    print("API: http://127.0.0.1:5000/api/games")
    main()


if __name__ == "__main__":
    local_main()
