"""
Locales — Translation tables

Nested by feature. Placeholders use {name} and are filled by
Translator.t(key, name=value). English is the fallback language.
"""

from typing import Any, Dict


DEFAULT_LANGUAGE = "en"

EN: Dict[str, Any] = {
    "middleware": {
        "confirm_destructive": "Are you sure you want to {verb} {object}? This action cannot be undone.",
        "cancelled": "Operation cancelled by user.",
        "dry_run": "DRY RUN MODE - No changes will be made",
        "would_execute": "Would execute: {command}",
        "parameters": "Parameters: {parameters}",
        "arguments": "Arguments: {args}",
        "slow": "Slow command detected: {duration}ms",
    },
    "errors": {
        "command_failed": "Command execution failed: {error}",
        "hint_not_found": "File or directory not found. Please check your paths.",
        "hint_permission": "Permission denied. Please check file permissions.",
        "hint_network": "Network error. Please check your internet connection.",
        "hint_auth": "API error. Please check your configuration and tokens.",
    },
    "config": {
        "initialized": "Configuration written to {path}",
        "exists": "Configuration already exists at {path}",
        "saved": "Set {key} = {value} ({scope})",
        "not_set": "{key} is not set",
        "platform_added": "Platform {type} registered",
        "no_platforms": "No platforms configured. Run: quartz set platform --type github",
        "language_set": "Language set to {language}",
    },
    "branch": {
        "created": "Created branch {name}",
        "checked_out": "Switched to new branch {name}",
        "deleted": "Deleted branch {name}",
        "none": "No branches found",
        "name_required": "Branch name is required (--name or positional)",
        "switched": "Switched to branch {name}",
    },
    "profile": {
        "saved": "Profile {name} saved ({scope})",
        "exists": "Profile {name} already exists. Use 'quartz save profile --name {name}' to overwrite it.",
        "loaded": "Switched to profile {name} ({scope})",
        "deleted": "Deleted profile {name}",
        "none": "No profiles saved. Run: quartz create profile --name <name>",
        "no_active": "No active profile. Pass --name or run: quartz use profile --name <name>",
        "current": "Profile: {name}",
        "platforms": "{count} platform(s)",
    },
    "project": {
        "root": "Root: {path}",
        "branch": "Branch: {name}",
        "remote": "Remote: {url}",
        "hosted": "Hosted on: {platform} ({owner}/{repo})",
        "no_remote": "No origin remote",
    },
    "commit": {
        "no_staged": "No staged changes found.",
        "use_git_add": "Use 'git add' to stage changes first.",
        "generating": "Generating commit message...",
        "generated": "Generated commit message:",
        "committed": "Committed {hash}",
        "tip": "Run again with --commit to commit with this message.",
    },
    "review": {
        "no_changes": "No changes to review.",
        "reviewing": "Reviewing {count} file(s)...",
        "result": "Review:",
    },
    "pr": {
        "no_commits": "No commits between {base} and {branch}.",
        "generating": "Generating pull request description ({branch} -> {base})...",
        "draft": "(draft)",
    },
    "changelog": {
        "no_commits": "No commits in range {range}.",
        "generating": "Generating changelog for {count} commit(s)...",
        "saved": "Changelog written to {path}",
    },
    "ai": {
        "usage": "Tokens: {input} in, {output} out",
    },
    "version": {
        "current": "quartz {version}",
    },
}

ZH: Dict[str, Any] = {
    "middleware": {
        "confirm_destructive": "确定要执行 {verb} {object} 吗？此操作无法撤销。",
        "cancelled": "操作已被用户取消。",
        "dry_run": "试运行模式 - 不会进行任何更改",
        "would_execute": "将要执行: {command}",
        "parameters": "参数: {parameters}",
        "arguments": "位置参数: {args}",
        "slow": "命令执行缓慢: {duration}ms",
    },
    "errors": {
        "command_failed": "命令执行失败: {error}",
        "hint_not_found": "文件或目录不存在，请检查路径。",
        "hint_permission": "权限不足，请检查文件权限。",
        "hint_network": "网络错误，请检查网络连接。",
        "hint_auth": "API 错误，请检查配置和令牌。",
    },
    "config": {
        "initialized": "配置已写入 {path}",
        "exists": "配置已存在于 {path}",
        "saved": "已设置 {key} = {value} ({scope})",
        "not_set": "{key} 未设置",
        "platform_added": "已注册平台 {type}",
        "no_platforms": "尚未配置平台。运行: quartz set platform --type github",
        "language_set": "语言已设置为 {language}",
    },
    "branch": {
        "created": "已创建分支 {name}",
        "checked_out": "已切换到新分支 {name}",
        "deleted": "已删除分支 {name}",
        "none": "未找到分支",
        "name_required": "需要分支名称 (--name 或位置参数)",
        "switched": "已切换到分支 {name}",
    },
    "profile": {
        "saved": "配置档案 {name} 已保存 ({scope})",
        "exists": "配置档案 {name} 已存在。使用 'quartz save profile --name {name}' 覆盖。",
        "loaded": "已切换到配置档案 {name} ({scope})",
        "deleted": "已删除配置档案 {name}",
        "none": "尚未保存配置档案。运行: quartz create profile --name <name>",
        "no_active": "没有当前配置档案。请传入 --name 或运行: quartz use profile --name <name>",
        "current": "配置档案: {name}",
        "platforms": "{count} 个平台",
    },
    "project": {
        "root": "根目录: {path}",
        "branch": "分支: {name}",
        "remote": "远程仓库: {url}",
        "hosted": "托管平台: {platform} ({owner}/{repo})",
        "no_remote": "没有 origin 远程仓库",
    },
    "commit": {
        "no_staged": "没有已暂存的更改。",
        "use_git_add": "请先使用 'git add' 暂存更改。",
        "generating": "正在生成提交信息...",
        "generated": "生成的提交信息:",
        "committed": "已提交 {hash}",
        "tip": "加上 --commit 重新运行即可使用此信息提交。",
    },
    "review": {
        "no_changes": "没有需要审查的更改。",
        "reviewing": "正在审查 {count} 个文件...",
        "result": "审查结果:",
    },
    "pr": {
        "no_commits": "{base} 与 {branch} 之间没有提交。",
        "generating": "正在生成合并请求描述 ({branch} -> {base})...",
        "draft": "(草稿)",
    },
    "changelog": {
        "no_commits": "{range} 范围内没有提交。",
        "generating": "正在为 {count} 个提交生成变更日志...",
        "saved": "变更日志已写入 {path}",
    },
    "ai": {
        "usage": "Tokens: 输入 {input}, 输出 {output}",
    },
    "version": {
        "current": "quartz {version}",
    },
}

LOCALES: Dict[str, Dict[str, Any]] = {
    "en": EN,
    "zh": ZH,
}
