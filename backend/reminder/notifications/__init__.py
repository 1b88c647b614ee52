# backend/reminder/notifications/__init__.py

"""
通知配信レイヤ用モジュール群。

スケジューラから見た「配信先（delivery sink）」を提供する。
OS の通知領域への表示そのものはホストアプリ側の責務とし、ここでは
ホスト内リスナーへのブロードキャスト・ログ出力・Webhook 送信までを扱う。

構成イメージ:
- schemas: 配信イベントのスキーマ
- service: 配信インターフェースと実装
- webhook: HTTP Webhook への配信
- factory: アプリ全体で共有する NotificationService の生成
"""
