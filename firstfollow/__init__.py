"""firstfollow – 문맥 자유 문법의 FIRST/FOLLOW 집합 계산기.

구성
----
- grammar  : 문법 모델(Grammar/Rule), 텍스트 포맷 로더/파서, 출력기
- analysis : FIRST/FOLLOW 계산 엔진
- ffc      : 명령행 도구
"""

from .grammar.model import EMPTY, Rule, Grammar
from .analysis.first_follow import first, follow, compute_sets, FFResult
