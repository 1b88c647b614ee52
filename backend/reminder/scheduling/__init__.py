# backend/reminder/scheduling/__init__.py

"""
予約通知スケジューラ用モジュール群。

- schemas: 予約ペイロード / Registration / レスポンスモデル
- registry: 配信待ち Registration の共有ストア
- scheduler: 予約・キャンセル・発火の本体
- config: 環境変数からの設定読み込み
- state: 共有スケジューラインスタンスの管理
- commands: ホストアプリ向けの境界操作
- router: HTTP エンドポイント
"""
