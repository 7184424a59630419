#!/usr/bin/env python3
"""
NAS 환경에서 실행하기 위한 스크립트
외부 접속을 허용하고 8080 포트를 사용합니다.
"""

import os

os.environ['FLASK_ENV'] = 'nas'

from run import main


def nas_main() -> None:
    """NAS 환경 전용 메인 함수"""
    print("NAS 환경에서 Lotto Research API를 시작합니다...")
    print("외부에서 접속하려면: http://[NAS_IP]:8080/api/games")
    main()


if __name__ == "__main__":
    nas_main()
