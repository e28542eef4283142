"""Landmark 인덱스 상수 및 트래킹 설정"""
